"""Manifest Scheduler — compiles a call target into a Manifest."""

from __future__ import annotations

import logging
from typing import Callable

from . import constants
from .args import Arg, ArgKind, synthetic_placeholder
from .instructions import Instruction
from .manifest import Manifest
from .targets import FunctionTarget, MethodTarget

logger = logging.getLogger(__name__)

_CALLER = constants.CALLER_PLACEHOLDER


def _sub(name: str, suffix: str) -> str:
    return synthetic_placeholder(name, suffix)


def _schedule_fungible_bucket(manifest: Manifest, arg: Arg, name: str) -> str:
    amount = _sub(name, constants.AMOUNT_SUFFIX)
    resource = _sub(name, constants.RESOURCE_SUFFIX)
    manifest.withdraw_by_amount(_CALLER, amount, resource)
    return manifest.take_from_worktop_by_amount(amount, resource)


def _schedule_non_fungible_bucket(manifest: Manifest, arg: Arg, name: str) -> str:
    ids = _sub(name, constants.IDS_SUFFIX)
    resource = _sub(name, constants.RESOURCE_SUFFIX)
    manifest.withdraw_by_ids(_CALLER, ids, resource)
    return manifest.take_from_worktop_by_ids(ids, resource)


def _schedule_fungible_proof(manifest: Manifest, arg: Arg, name: str) -> str:
    amount = _sub(name, constants.AMOUNT_SUFFIX)
    resource = _sub(name, constants.RESOURCE_SUFFIX)
    manifest.create_proof_by_amount(_CALLER, amount, resource)
    return manifest.create_proof_from_auth_zone_by_amount(amount, resource)


def _schedule_non_fungible_proof(manifest: Manifest, arg: Arg, name: str) -> str:
    ids = _sub(name, constants.IDS_SUFFIX)
    resource = _sub(name, constants.RESOURCE_SUFFIX)
    manifest.create_proof_by_ids(_CALLER, ids, resource)
    return manifest.create_proof_from_auth_zone_by_ids(ids, resource)


def _schedule_literal(manifest: Manifest, arg: Arg, name: str) -> str:
    return arg.to_generic(name)


_ARG_DISPATCH: dict[ArgKind, Callable[[Manifest, Arg, str], str]] = {
    ArgKind.FUNGIBLE_BUCKET: _schedule_fungible_bucket,
    ArgKind.NON_FUNGIBLE_BUCKET: _schedule_non_fungible_bucket,
    ArgKind.FUNGIBLE_PROOF: _schedule_fungible_proof,
    ArgKind.NON_FUNGIBLE_PROOF: _schedule_non_fungible_proof,
}


def schedule_arguments(manifest: Manifest, args: list[Arg]) -> list[str]:
    """Render each argument in call-site order, emitting preamble as needed.

    Returns the rendered call-argument list.
    """
    rendered: list[str] = []
    for arg in args:
        name = manifest.next_argument()
        handler = _ARG_DISPATCH.get(arg.kind, _schedule_literal)
        rendered.append(handler(manifest, arg, name))
        logger.debug("Scheduled %s as %s → %s", arg.kind.value, name, rendered[-1])
    return rendered


def _call_instruction(
    target: MethodTarget | FunctionTarget, rendered: list[str]
) -> Instruction:
    if isinstance(target, MethodTarget):
        return Instruction.call_method(
            constants.COMPONENT_PLACEHOLDER, target.method, rendered
        )
    if isinstance(target, FunctionTarget):
        return Instruction.call_function(
            constants.PACKAGE_PLACEHOLDER, target.blueprint, target.function, rendered
        )
    raise ValueError(f"Unsupported call target: {type(target).__name__}")


def compile_call(target: MethodTarget | FunctionTarget) -> Manifest:
    """Compile *target* into a fresh Manifest.

    Layout: fee lock, optional admin-badge proof, per-argument preamble,
    then the call, DROP_ALL_PROOFS when any proof was created, and a
    deposit of the entire worktop back to the caller. The fee amount is a
    placeholder like every other value, so the text depends on the target
    alone.
    """
    manifest = Manifest()
    manifest.lock_fee(constants.FEE_PAYER_PLACEHOLDER, constants.FEE_LOCK_PLACEHOLDER)
    if target.requires_authorization():
        manifest.create_proof(_CALLER, constants.BADGE_PLACEHOLDER)

    rendered = schedule_arguments(manifest, target.arguments())
    manifest.call(_call_instruction(target, rendered))
    manifest.drop_proofs()
    manifest.deposit_batch(_CALLER)

    logger.info(
        "Compiled %s: %d instructions, %d handles, proofs=%s",
        target.name(),
        len(manifest.instructions()),
        manifest.next_handle,
        manifest.has_proofs,
    )
    return manifest
