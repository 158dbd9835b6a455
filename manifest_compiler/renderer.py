"""Renderer — deterministic textual emission of instructions."""

from __future__ import annotations

from typing import Callable

from . import constants
from .args import placeholder
from .instructions import Instruction, Opcode


def _call_function_operands(inst: Instruction) -> list[str]:
    return [
        f'PackageAddress("{placeholder(inst.address)}")',
        f'"{inst.blueprint}"',
        f'"{inst.name}"',
        *inst.args,
    ]


def _call_method_operands(inst: Instruction) -> list[str]:
    return [
        f'ComponentAddress("{placeholder(inst.address)}")',
        f'"{inst.name}"',
        *inst.args,
    ]


def _by_amount_operands(inst: Instruction) -> list[str]:
    return [
        f'Decimal("{placeholder(inst.amount)}")',
        f'ResourceAddress("{placeholder(inst.resource)}")',
        inst.handle_reference(),
    ]


def _by_ids_operands(inst: Instruction) -> list[str]:
    return [
        f"Array<NonFungibleId>({placeholder(inst.ids)})",
        f'ResourceAddress("{placeholder(inst.resource)}")',
        inst.handle_reference(),
    ]


def _no_operands(inst: Instruction) -> list[str]:
    return []


_OPERAND_DISPATCH: dict[Opcode, Callable[[Instruction], list[str]]] = {
    Opcode.CALL_FUNCTION: _call_function_operands,
    Opcode.CALL_METHOD: _call_method_operands,
    Opcode.TAKE_FROM_WORKTOP_BY_AMOUNT: _by_amount_operands,
    Opcode.TAKE_FROM_WORKTOP_BY_IDS: _by_ids_operands,
    Opcode.CREATE_PROOF_FROM_AUTH_ZONE_BY_AMOUNT: _by_amount_operands,
    Opcode.CREATE_PROOF_FROM_AUTH_ZONE_BY_IDS: _by_ids_operands,
    Opcode.DROP_ALL_PROOFS: _no_operands,
}


def render(inst: Instruction) -> str:
    """Render one instruction as a ``;``-terminated block.

    The opcode sits on the first line, each operand on its own
    tab-indented line after it.
    """
    operands = _OPERAND_DISPATCH[inst.opcode](inst)
    lines = [inst.opcode.value]
    lines.extend(f"{constants.OPERAND_INDENT}{op}" for op in operands)
    return "\n".join(lines) + constants.STATEMENT_TERMINATOR


def render_manifest(preamble: list[Instruction], body: list[Instruction]) -> str:
    """Concatenate preamble then body blocks, separated by blank lines."""
    blocks = [render(inst) for inst in [*preamble, *body]]
    return constants.BLOCK_SEPARATOR.join(blocks) + "\n"
