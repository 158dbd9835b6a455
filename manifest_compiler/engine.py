"""Outcomes, receipts and the execution engine interface."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .errors import EngineRejection

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    SUCCESS = "SUCCESS"
    ASSERTION_FAILED = "ASSERTION_FAILED"
    OTHER_ERROR = "OTHER_ERROR"


@dataclass(frozen=True)
class Outcome:
    """Classified result of executing a program."""

    kind: OutcomeKind
    message: str = ""

    @classmethod
    def success(cls) -> Outcome:
        return cls(kind=OutcomeKind.SUCCESS)

    @classmethod
    def assertion_failed(cls, message: str) -> Outcome:
        return cls(kind=OutcomeKind.ASSERTION_FAILED, message=message)

    @classmethod
    def other_error(cls, message: str) -> Outcome:
        return cls(kind=OutcomeKind.OTHER_ERROR, message=message)

    def is_success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    def matches(self, expected: Outcome) -> bool:
        """True if this outcome satisfies *expected*.

        A non-empty expected message only needs to occur in the actual one.
        """
        if self.kind != expected.kind:
            return False
        return not expected.message or expected.message in self.message

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value


@dataclass(frozen=True)
class Receipt:
    outcome: Outcome
    fee_paid: Decimal | None = None
    output: str = ""

    def expect(self, expected: Outcome = Outcome.success()) -> Receipt:
        """Raise EngineRejection unless the outcome matches *expected*."""
        if not self.outcome.matches(expected):
            raise EngineRejection(self.outcome, expected, self.output)
        return self


class ExecutionEngine(ABC):
    """Opaque executor of finalized program text."""

    @abstractmethod
    def execute(self, program: str, signer: str) -> Receipt:
        """Run *program* authorised by *signer* and classify the result."""
        ...


class OutputPatterns:
    """Compiled regex patterns for simulator transcripts."""

    SUCCESS_RE = re.compile(r"Transaction Status: COMMITTED SUCCESS")
    PANIC_RE = re.compile(r"Panicked at '(.*?)'")
    FAILURE_RE = re.compile(r"Transaction Status: COMMITTED FAILURE: (.*)")
    REJECTED_RE = re.compile(r"Transaction Status: REJECTED: (.*)")
    FEE_RE = re.compile(r"Transaction Fee: ([\d.]+)")


def classify_output(stdout: str) -> Receipt:
    """Classify a simulator transcript into a Receipt.

    For ExecutionEngine implementations that drive the simulator CLI and
    hand its stdout back; the compiler itself never executes anything.
    """
    fee_match = OutputPatterns.FEE_RE.search(stdout)
    fee = Decimal(fee_match.group(1)) if fee_match else None

    if OutputPatterns.SUCCESS_RE.search(stdout):
        return Receipt(Outcome.success(), fee, stdout)

    panic = OutputPatterns.PANIC_RE.search(stdout)
    if panic:
        return Receipt(Outcome.assertion_failed(panic.group(1)), fee, stdout)

    failure = OutputPatterns.FAILURE_RE.search(stdout) or OutputPatterns.REJECTED_RE.search(
        stdout
    )
    if failure:
        return Receipt(Outcome.other_error(failure.group(1).strip()), fee, stdout)

    logger.warning("Unrecognised engine output (%d bytes)", len(stdout))
    return Receipt(Outcome.other_error("unrecognised output"), fee, stdout)
