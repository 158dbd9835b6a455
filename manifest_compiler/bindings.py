"""Maps argument trees to (placeholder, literal) bindings and substitutes them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from . import constants
from .args import (
    EPHEMERAL_KINDS,
    FUNGIBLE_REQUEST_KINDS,
    INTEGER_RANGES,
    RAW_LITERAL_KINDS,
    DECIMAL_KINDS,
    Arg,
    ArgKind,
    arg_placeholder,
    decimal_text,
    synthetic_placeholder,
)
from .config import CompilerConfig
from .errors import MissingBinding
from .registry import EntityKind, Registry
from .targets import FunctionTarget, MethodTarget

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(constants.PLACEHOLDER_PATTERN)

_REFERENCE_ENTITIES: dict[ArgKind, EntityKind] = {
    ArgKind.PACKAGE: EntityKind.PACKAGE,
    ArgKind.COMPONENT: EntityKind.COMPONENT,
    ArgKind.ACCOUNT: EntityKind.ACCOUNT,
    ArgKind.RESOURCE: EntityKind.RESOURCE,
}


@dataclass(frozen=True)
class Binding:
    placeholder: str
    value: str


@dataclass(frozen=True)
class CallContext:
    """Who signs the call and who pays its fee (defaults to the caller)."""

    caller: str
    fee_payer: str | None = None


# ── Substitution ─────────────────────────────────────────────────


def placeholders_in(text: str) -> list[str]:
    """Distinct placeholder names in *text*, in order of first appearance."""
    return list(dict.fromkeys(_PLACEHOLDER_RE.findall(text)))


def apply_bindings(text: str, bindings: list[Binding]) -> str:
    """Substitute every ``${name}`` in *text* in a single pass.

    Raises MissingBinding when a placeholder is unbound or when two
    bindings give one placeholder different values.
    """
    values: dict[str, str] = {}
    conflicting: list[str] = []
    for binding in bindings:
        previous = values.get(binding.placeholder)
        if previous is not None and previous != binding.value:
            conflicting.append(binding.placeholder)
        values[binding.placeholder] = binding.value
    if conflicting:
        raise MissingBinding(sorted(set(conflicting)), reason="conflicting")

    missing = [name for name in placeholders_in(text) if name not in values]
    if missing:
        raise MissingBinding(missing)
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], text)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _ids_literal(ids: list[str]) -> str:
    return ", ".join(f"NonFungibleId({_quote(nf_id)})" for nf_id in ids)


# ── Resolver ─────────────────────────────────────────────────────


class BindingResolver:
    """Resolves argument and context placeholders against a registry snapshot.

    The fee lock amount comes from *config*, so a cached template can be
    bound under any fee setting.
    """

    def __init__(self, registry: Registry, config: CompilerConfig = CompilerConfig()):
        self._registry = registry
        self._config = config

    def resolve(self, args: list[Arg]) -> list[Binding]:
        """Bindings for top-level arguments ``arg_0 .. arg_n`` in call order.

        Either every binding is produced or UnknownRegistryName propagates.
        """
        bindings: list[Binding] = []
        for index, arg in enumerate(args):
            bindings.extend(self.bindings_for(arg, arg_placeholder(index)))
        return bindings

    def resolve_call(
        self, target: MethodTarget | FunctionTarget, context: CallContext
    ) -> list[Binding]:
        """Context bindings followed by argument bindings for *target*."""
        bindings = self.context_bindings(target, context)
        bindings.extend(self.resolve(target.arguments()))
        logger.info("Resolved %d bindings for %s", len(bindings), target.name())
        return bindings

    def context_bindings(
        self, target: MethodTarget | FunctionTarget, context: CallContext
    ) -> list[Binding]:
        caller = self._registry.lookup(EntityKind.ACCOUNT, context.caller)
        fee_payer = (
            self._registry.get_address(context.fee_payer)
            if context.fee_payer
            else caller
        )
        bindings = [
            Binding(constants.CALLER_PLACEHOLDER, caller),
            Binding(constants.FEE_PAYER_PLACEHOLDER, fee_payer),
            Binding(
                constants.FEE_LOCK_PLACEHOLDER,
                decimal_text(self._config.fee_lock_amount),
            ),
        ]
        if isinstance(target, MethodTarget):
            bindings.append(
                Binding(
                    constants.COMPONENT_PLACEHOLDER,
                    self._registry.lookup(EntityKind.COMPONENT, target.component),
                )
            )
            if target.requires_authorization():
                bindings.append(
                    Binding(
                        constants.BADGE_PLACEHOLDER,
                        self._registry.lookup(EntityKind.RESOURCE, target.admin_badge),
                    )
                )
        else:
            bindings.append(
                Binding(
                    constants.PACKAGE_PLACEHOLDER,
                    self._registry.lookup(EntityKind.PACKAGE, target.package),
                )
            )
        return bindings

    def bindings_for(self, arg: Arg, name: str) -> list[Binding]:
        """Bindings for the placeholders ``arg.to_generic(name)`` introduces."""
        if arg.kind == ArgKind.UNIT:
            return []
        if arg.kind in EPHEMERAL_KINDS:
            return self._request_bindings(arg, name)
        if arg.kind == ArgKind.NON_FUNGIBLE_ID:
            return self.bindings_for(arg.elements[0], name)
        if arg.kind == ArgKind.NON_FUNGIBLE_ADDRESS:
            resource = self._registry.lookup(EntityKind.RESOURCE, arg.value)
            return [
                Binding(synthetic_placeholder(name, constants.RESOURCE_SUFFIX), resource),
                *self.bindings_for(
                    arg.elements[0],
                    synthetic_placeholder(name, constants.ID_SUFFIX),
                ),
            ]
        binding = Binding(name, self._value_text(arg, name))
        logger.debug("Bound %s = %s", binding.placeholder, binding.value)
        return [binding]

    def literal(self, arg: Arg, name: str) -> str:
        """Fully substituted manifest text of *arg* rendered under *name*."""
        return apply_bindings(arg.to_generic(name), self.bindings_for(arg, name))

    # ── helpers ──────────────────────────────────────────────────

    def _join_literals(self, children: list[Arg], parent: str) -> str:
        return ", ".join(
            self.literal(child, synthetic_placeholder(parent, index))
            for index, child in enumerate(children)
        )

    def _value_text(self, arg: Arg, name: str) -> str:
        kind = arg.kind
        if kind == ArgKind.BOOL:
            return "true" if arg.value else "false"
        if kind in INTEGER_RANGES:
            return str(arg.value)
        if kind == ArgKind.STRING:
            return _quote(arg.value)[1:-1]
        if kind in DECIMAL_KINDS:
            return decimal_text(arg.amount)
        if kind in _REFERENCE_ENTITIES:
            return self._registry.lookup(_REFERENCE_ENTITIES[kind], arg.value)
        if kind in RAW_LITERAL_KINDS:
            return arg.value
        if kind == ArgKind.ENUM:
            variant = _quote(arg.value)
            if not arg.elements:
                return variant
            return f"{variant}, {self._join_literals(arg.elements, name)}"
        if kind in (ArgKind.TUPLE, ArgKind.VEC):
            return self._join_literals(arg.elements, name)
        if kind == ArgKind.MAP:
            return ", ".join(
                f"{self.literal(key, synthetic_placeholder(name, f'{index}_key'))}"
                f" => {self.literal(val, synthetic_placeholder(name, f'{index}_value'))}"
                for index, (key, val) in enumerate(arg.entries)
            )
        raise ValueError(f"Cannot bind argument of kind {kind.value}")

    def _request_bindings(self, arg: Arg, name: str) -> list[Binding]:
        resource = self._registry.lookup(EntityKind.RESOURCE, arg.value)
        fungible = arg.kind in FUNGIBLE_REQUEST_KINDS
        if self._registry.is_fungible(resource) != fungible:
            logger.warning(
                "%s requests resource %r, which is registered as %sfungible",
                arg.kind.value,
                arg.value,
                "non-" if fungible else "",
            )
        if fungible:
            first = Binding(
                synthetic_placeholder(name, constants.AMOUNT_SUFFIX),
                decimal_text(arg.amount),
            )
        else:
            first = Binding(
                synthetic_placeholder(name, constants.IDS_SUFFIX), _ids_literal(arg.ids)
            )
        return [first, Binding(synthetic_placeholder(name, constants.RESOURCE_SUFFIX), resource)]
