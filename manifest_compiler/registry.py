"""Registry — read-only name → address lookup for ledger entities."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import UnknownRegistryName

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    ACCOUNT = "account"
    COMPONENT = "component"
    PACKAGE = "package"
    RESOURCE = "resource"


# get_address() searches the tables in this order
_SEARCH_ORDER: tuple[EntityKind, ...] = (
    EntityKind.RESOURCE,
    EntityKind.COMPONENT,
    EntityKind.ACCOUNT,
    EntityKind.PACKAGE,
)


class Registry(ABC):
    """Abstract name registry consulted while binding a manifest."""

    @abstractmethod
    def lookup(self, kind: EntityKind, name: str) -> str:
        """Return the address registered for *name* among entities of *kind*."""
        ...

    @abstractmethod
    def get_address(self, name: str) -> str:
        """Return the address registered for *name* under any kind."""
        ...

    @abstractmethod
    def is_fungible(self, address: str) -> bool: ...


def _key(name: str) -> str:
    return name.lower()


@dataclass
class LedgerRegistry(Registry):
    """In-memory registry; names are case-insensitive."""

    tables: dict[EntityKind, dict[str, str]] = field(
        default_factory=lambda: {kind: {} for kind in EntityKind}
    )
    fungible: dict[str, bool] = field(default_factory=dict)

    def add_account(self, name: str, address: str) -> None:
        self._add(EntityKind.ACCOUNT, name, address)

    def add_component(self, name: str, address: str) -> None:
        self._add(EntityKind.COMPONENT, name, address)

    def add_package(self, name: str, address: str) -> None:
        self._add(EntityKind.PACKAGE, name, address)

    def add_resource(self, name: str, address: str, fungible: bool = True) -> None:
        self._add(EntityKind.RESOURCE, name, address)
        self.fungible[address] = fungible

    def _add(self, kind: EntityKind, name: str, address: str) -> None:
        table = self.tables[kind]
        if _key(name) in table:
            raise ValueError(f"A {kind.value} named {name!r} already exists")
        table[_key(name)] = address
        logger.debug("Registered %s %s → %s", kind.value, name, address)

    def lookup(self, kind: EntityKind, name: str) -> str:
        address = self.tables[kind].get(_key(name))
        if address is None:
            raise UnknownRegistryName(name, kind.value)
        return address

    def get_address(self, name: str) -> str:
        for kind in _SEARCH_ORDER:
            address = self.tables[kind].get(_key(name))
            if address is not None:
                return address
        raise UnknownRegistryName(name)

    def is_fungible(self, address: str) -> bool:
        if address not in self.fungible:
            raise UnknownRegistryName(address, EntityKind.RESOURCE.value)
        return self.fungible[address]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerRegistry:
        """Build a registry from ``{"accounts": {...}, "resources": {...}, ...}``.

        Resource entries are either a bare address (fungible) or
        ``{"address": ..., "fungible": bool}``.
        """
        registry = cls()
        for name, address in data.get("accounts", {}).items():
            registry.add_account(name, address)
        for name, address in data.get("components", {}).items():
            registry.add_component(name, address)
        for name, address in data.get("packages", {}).items():
            registry.add_package(name, address)
        for name, entry in data.get("resources", {}).items():
            if isinstance(entry, str):
                registry.add_resource(name, entry)
            else:
                registry.add_resource(
                    name, entry["address"], entry.get("fungible", True)
                )
        return registry
