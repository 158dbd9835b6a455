"""Compiler configuration (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from . import constants


@dataclass(frozen=True)
class CompilerConfig:
    """Groups compilation and template-storage settings."""

    fee_lock_amount: Decimal = Decimal(constants.DEFAULT_FEE_LOCK)
    template_dir_name: str = constants.TEMPLATE_DIR_NAME
    template_suffix: str = constants.TEMPLATE_SUFFIX
