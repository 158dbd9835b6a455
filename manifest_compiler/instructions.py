"""Instruction Set — the ledger-program instruction vocabulary."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel


class Opcode(str, Enum):
    # Calls
    CALL_FUNCTION = "CALL_FUNCTION"
    CALL_METHOD = "CALL_METHOD"
    # Handle producers
    TAKE_FROM_WORKTOP_BY_AMOUNT = "TAKE_FROM_WORKTOP_BY_AMOUNT"
    TAKE_FROM_WORKTOP_BY_IDS = "TAKE_FROM_WORKTOP_BY_IDS"
    CREATE_PROOF_FROM_AUTH_ZONE_BY_AMOUNT = "CREATE_PROOF_FROM_AUTH_ZONE_BY_AMOUNT"
    CREATE_PROOF_FROM_AUTH_ZONE_BY_IDS = "CREATE_PROOF_FROM_AUTH_ZONE_BY_IDS"
    # Cleanup
    DROP_ALL_PROOFS = "DROP_ALL_PROOFS"


BUCKET_TAG = "Bucket"
PROOF_TAG = "Proof"

_HANDLE_TAGS: dict[Opcode, str] = {
    Opcode.TAKE_FROM_WORKTOP_BY_AMOUNT: BUCKET_TAG,
    Opcode.TAKE_FROM_WORKTOP_BY_IDS: BUCKET_TAG,
    Opcode.CREATE_PROOF_FROM_AUTH_ZONE_BY_AMOUNT: PROOF_TAG,
    Opcode.CREATE_PROOF_FROM_AUTH_ZONE_BY_IDS: PROOF_TAG,
}

_HANDLE_REF_RE = re.compile(r'(?:Bucket|Proof)\("(\d+)"\)')


def handle_reference(tag: str, handle: int) -> str:
    """Literal reference to an allocated handle, e.g. ``Bucket("0")``."""
    return f'{tag}("{handle}")'


class Instruction(BaseModel):
    """One ledger-program instruction.

    ``address``, ``amount``, ``resource`` and ``ids`` hold placeholder *names*
    (rendered as ``${name}``); ``args`` holds already-rendered argument text;
    ``handle`` is the bucket/proof id allocated by a producer instruction.
    """

    opcode: Opcode
    address: str | None = None
    blueprint: str | None = None
    name: str | None = None
    args: list[str] = []
    amount: str | None = None
    resource: str | None = None
    ids: str | None = None
    handle: int | None = None

    def __str__(self) -> str:
        from .renderer import render

        return render(self)

    # ── factories ────────────────────────────────────────────────

    @classmethod
    def call_function(
        cls, package: str, blueprint: str, function: str, args: list[str]
    ) -> Instruction:
        return cls(
            opcode=Opcode.CALL_FUNCTION,
            address=package,
            blueprint=blueprint,
            name=function,
            args=args,
        )

    @classmethod
    def call_method(cls, component: str, method: str, args: list[str]) -> Instruction:
        return cls(opcode=Opcode.CALL_METHOD, address=component, name=method, args=args)

    @classmethod
    def take_from_worktop_by_amount(
        cls, amount: str, resource: str, handle: int
    ) -> Instruction:
        return cls(
            opcode=Opcode.TAKE_FROM_WORKTOP_BY_AMOUNT,
            amount=amount,
            resource=resource,
            handle=handle,
        )

    @classmethod
    def take_from_worktop_by_ids(cls, ids: str, resource: str, handle: int) -> Instruction:
        return cls(
            opcode=Opcode.TAKE_FROM_WORKTOP_BY_IDS,
            ids=ids,
            resource=resource,
            handle=handle,
        )

    @classmethod
    def create_proof_from_auth_zone_by_amount(
        cls, amount: str, resource: str, handle: int
    ) -> Instruction:
        return cls(
            opcode=Opcode.CREATE_PROOF_FROM_AUTH_ZONE_BY_AMOUNT,
            amount=amount,
            resource=resource,
            handle=handle,
        )

    @classmethod
    def create_proof_from_auth_zone_by_ids(
        cls, ids: str, resource: str, handle: int
    ) -> Instruction:
        return cls(
            opcode=Opcode.CREATE_PROOF_FROM_AUTH_ZONE_BY_IDS,
            ids=ids,
            resource=resource,
            handle=handle,
        )

    @classmethod
    def drop_all_proofs(cls) -> Instruction:
        return cls(opcode=Opcode.DROP_ALL_PROOFS)

    # ── handle bookkeeping ───────────────────────────────────────

    def produced_handle(self) -> int | None:
        """Handle id this instruction creates, if it is a producer."""
        if self.opcode in _HANDLE_TAGS:
            return self.handle
        return None

    def handle_reference(self) -> str:
        return handle_reference(_HANDLE_TAGS[self.opcode], self.handle)

    def consumed_handles(self) -> list[int]:
        """Handle ids referenced by this instruction's call arguments."""
        return [int(m) for arg in self.args for m in _HANDLE_REF_RE.findall(arg)]
