"""Error taxonomy for manifest compilation and binding."""

from __future__ import annotations

from typing import Any


class ManifestError(Exception):
    """Base class for every error raised by the compiler pipeline."""


class UnknownRegistryName(ManifestError, KeyError):
    """A named reference was never registered."""

    def __init__(self, name: str, kind: str = "entity"):
        self.name = name
        self.kind = kind
        super().__init__(f"No {kind} registered under name {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class MissingBinding(ManifestError):
    """A placeholder in rendered text has no (or more than one) binding."""

    def __init__(self, placeholders: list[str], reason: str = "unbound"):
        self.placeholders = placeholders
        self.reason = reason
        super().__init__(f"{reason} placeholder(s): {', '.join(placeholders)}")


class MalformedTemplate(ManifestError):
    """A cached template could not be read or is structurally inconsistent."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Malformed template at {location}: {reason}")


class EngineRejection(ManifestError):
    """The execution engine reported an outcome other than the expected one."""

    def __init__(self, outcome: Any, expected: Any = None, output: str = ""):
        self.outcome = outcome
        self.expected = expected
        self.output = output
        message = f"Engine reported {outcome}"
        if expected is not None:
            message += f" (expected {expected})"
        super().__init__(message)
