"""Manifest — the mutable compilation unit of one call."""

from __future__ import annotations

import logging

from . import constants
from .args import arg_placeholder, placeholder
from .instructions import BUCKET_TAG, PROOF_TAG, Instruction, handle_reference
from .renderer import render_manifest

logger = logging.getLogger(__name__)


def _resource_operand(resource: str) -> str:
    return f'ResourceAddress("{placeholder(resource)}")'


def _amount_operand(amount: str) -> str:
    return f'Decimal("{placeholder(amount)}")'


def _ids_operand(ids: str) -> str:
    return f"Array<NonFungibleId>({placeholder(ids)})"


class Manifest:
    """Preamble/body instruction lists plus the counters that name them.

    The preamble acquires resources (fee lock, withdrawals, proofs); the
    body holds the call followed by cleanup. Handle ids and argument
    indices only ever increase.
    """

    def __init__(self):
        self.preamble: list[Instruction] = []
        self.body: list[Instruction] = []
        self.next_handle: int = 0
        self.arg_count: int = 0
        self.has_proofs: bool = False

    # ── counters ─────────────────────────────────────────────────

    def allocate_handle(self) -> int:
        handle = self.next_handle
        self.next_handle += 1
        return handle

    def next_argument(self) -> str:
        """Return the placeholder name of the next argument and advance."""
        name = arg_placeholder(self.arg_count)
        self.arg_count += 1
        return name

    # ── preamble ─────────────────────────────────────────────────

    def lock_fee(self, account: str, amount: str) -> None:
        self.preamble.append(
            Instruction.call_method(
                account, constants.LOCK_FEE_METHOD, [_amount_operand(amount)]
            )
        )

    def create_proof(self, account: str, resource: str) -> None:
        self.preamble.append(
            Instruction.call_method(
                account, constants.CREATE_PROOF_METHOD, [_resource_operand(resource)]
            )
        )

    def withdraw_by_amount(self, account: str, amount: str, resource: str) -> None:
        self.preamble.append(
            Instruction.call_method(
                account,
                constants.WITHDRAW_BY_AMOUNT_METHOD,
                [_amount_operand(amount), _resource_operand(resource)],
            )
        )

    def withdraw_by_ids(self, account: str, ids: str, resource: str) -> None:
        self.preamble.append(
            Instruction.call_method(
                account,
                constants.WITHDRAW_BY_IDS_METHOD,
                [_ids_operand(ids), _resource_operand(resource)],
            )
        )

    def create_proof_by_amount(self, account: str, amount: str, resource: str) -> None:
        self.preamble.append(
            Instruction.call_method(
                account,
                constants.CREATE_PROOF_BY_AMOUNT_METHOD,
                [_amount_operand(amount), _resource_operand(resource)],
            )
        )

    def create_proof_by_ids(self, account: str, ids: str, resource: str) -> None:
        self.preamble.append(
            Instruction.call_method(
                account,
                constants.CREATE_PROOF_BY_IDS_METHOD,
                [_ids_operand(ids), _resource_operand(resource)],
            )
        )

    def take_from_worktop_by_amount(self, amount: str, resource: str) -> str:
        """Append the take and return a literal reference to the new bucket."""
        handle = self.allocate_handle()
        self.preamble.append(
            Instruction.take_from_worktop_by_amount(amount, resource, handle)
        )
        return handle_reference(BUCKET_TAG, handle)

    def take_from_worktop_by_ids(self, ids: str, resource: str) -> str:
        handle = self.allocate_handle()
        self.preamble.append(Instruction.take_from_worktop_by_ids(ids, resource, handle))
        return handle_reference(BUCKET_TAG, handle)

    def create_proof_from_auth_zone_by_amount(self, amount: str, resource: str) -> str:
        """Append the proof creation, flag cleanup, return the proof reference."""
        handle = self.allocate_handle()
        self.preamble.append(
            Instruction.create_proof_from_auth_zone_by_amount(amount, resource, handle)
        )
        self.has_proofs = True
        return handle_reference(PROOF_TAG, handle)

    def create_proof_from_auth_zone_by_ids(self, ids: str, resource: str) -> str:
        handle = self.allocate_handle()
        self.preamble.append(
            Instruction.create_proof_from_auth_zone_by_ids(ids, resource, handle)
        )
        self.has_proofs = True
        return handle_reference(PROOF_TAG, handle)

    # ── body ─────────────────────────────────────────────────────

    def call(self, inst: Instruction) -> None:
        self.body.append(inst)

    def drop_proofs(self) -> None:
        if self.has_proofs:
            self.body.append(Instruction.drop_all_proofs())

    def deposit_batch(self, account: str) -> None:
        self.body.append(
            Instruction.call_method(
                account,
                constants.DEPOSIT_BATCH_METHOD,
                [constants.ENTIRE_WORKTOP_EXPRESSION],
            )
        )

    # ── output ───────────────────────────────────────────────────

    def instructions(self) -> list[Instruction]:
        return [*self.preamble, *self.body]

    def check_handles(self) -> None:
        """Raise ValueError unless every handle is created once, before any use."""
        created: set[int] = set()
        for inst in self.instructions():
            for handle in inst.consumed_handles():
                if handle not in created:
                    raise ValueError(f"Handle {handle} is used before it is created")
            handle = inst.produced_handle()
            if handle is None:
                continue
            if handle in created:
                raise ValueError(f"Handle {handle} is allocated twice")
            created.add(handle)

    def build(self) -> str:
        self.check_handles()
        logger.debug(
            "Rendering manifest: %d preamble + %d body instructions",
            len(self.preamble),
            len(self.body),
        )
        return render_manifest(self.preamble, self.body)
