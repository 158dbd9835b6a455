"""Memoised generic manifest text, keyed by call name."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

from . import constants
from .config import CompilerConfig
from .errors import MalformedTemplate

logger = logging.getLogger(__name__)


class TemplateStore(ABC):
    """Storage backend for generic templates."""

    @abstractmethod
    def exists(self, name: str) -> bool: ...

    @abstractmethod
    def read(self, name: str) -> str: ...

    @abstractmethod
    def write(self, name: str, text: str) -> None: ...

    @abstractmethod
    def location(self, name: str) -> str:
        """Human-readable location of the template, for diagnostics."""
        ...


class InMemoryTemplateStore(TemplateStore):
    def __init__(self):
        self.templates: dict[str, str] = {}

    def exists(self, name: str) -> bool:
        return name in self.templates

    def read(self, name: str) -> str:
        return self.templates[name]

    def write(self, name: str, text: str) -> None:
        self.templates[name] = text

    def location(self, name: str) -> str:
        return f"memory:{name}"


class FileTemplateStore(TemplateStore):
    """One ``<name>.rtm`` file per call under ``<package_dir>/rtm/``."""

    def __init__(self, package_dir: str | Path, config: CompilerConfig = CompilerConfig()):
        self.directory = Path(package_dir) / config.template_dir_name
        self._suffix = config.template_suffix

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}{self._suffix}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> str:
        path = self.path_for(name)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MalformedTemplate(str(path), f"unreadable ({exc})") from exc

    def write(self, name: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(name).write_text(text, encoding="utf-8")

    def location(self, name: str) -> str:
        return str(self.path_for(name))


def validate_template(text: str, location: str) -> str:
    """Check that *text* is a sequence of ``;``-terminated blocks."""
    blocks = [b.strip() for b in text.split(constants.BLOCK_SEPARATOR) if b.strip()]
    if not blocks:
        raise MalformedTemplate(location, "empty template")
    unterminated = [
        index
        for index, block in enumerate(blocks)
        if not block.endswith(constants.STATEMENT_TERMINATOR)
    ]
    if unterminated:
        raise MalformedTemplate(
            location, f"unterminated instruction block(s) at {unterminated}"
        )
    return text


class TemplateCache:
    """Check-then-write memoisation of generated templates (single writer)."""

    def __init__(self, store: TemplateStore):
        self.store = store

    def get_or_create(self, name: str, generator: Callable[[], str]) -> str:
        """Return the cached template for *name*, generating it on a miss."""
        location = self.store.location(name)
        if self.store.exists(name):
            logger.info("Template cache hit: %s", location)
            return validate_template(self.store.read(name), location)
        logger.info("Template cache miss: %s, generating", location)
        text = generator()
        self.store.write(name, text)
        return text

    def location(self, name: str) -> str:
        return self.store.location(name)
