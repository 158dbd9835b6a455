"""Named constants for placeholders, account methods and template layout."""

from __future__ import annotations

PLACEHOLDER_TEMPLATE = "${{{name}}}"
PLACEHOLDER_PATTERN = r"\$\{(\w+)\}"

ARG_PLACEHOLDER_PREFIX = "arg_"

# Context placeholders bound from the CallContext, not from arguments
CALLER_PLACEHOLDER = "caller_address"
FEE_PAYER_PLACEHOLDER = "fee_payer_address"
COMPONENT_PLACEHOLDER = "component_address"
PACKAGE_PLACEHOLDER = "package_address"
BADGE_PLACEHOLDER = "badge_address"
FEE_LOCK_PLACEHOLDER = "fee_lock_amount"

# Sub-placeholder suffixes for arguments that expand to several bindings
AMOUNT_SUFFIX = "amount"
RESOURCE_SUFFIX = "resource"
IDS_SUFFIX = "ids"
ID_SUFFIX = "id"

# Account methods used by the preamble and cleanup phases
LOCK_FEE_METHOD = "lock_fee"
WITHDRAW_BY_AMOUNT_METHOD = "withdraw_by_amount"
WITHDRAW_BY_IDS_METHOD = "withdraw_by_ids"
CREATE_PROOF_METHOD = "create_proof"
CREATE_PROOF_BY_AMOUNT_METHOD = "create_proof_by_amount"
CREATE_PROOF_BY_IDS_METHOD = "create_proof_by_ids"
DEPOSIT_BATCH_METHOD = "deposit_batch"

ENTIRE_WORKTOP_EXPRESSION = 'Expression("ENTIRE_WORKTOP")'

DEFAULT_FEE_LOCK = "100"

TEMPLATE_DIR_NAME = "rtm"
TEMPLATE_SUFFIX = ".rtm"

STATEMENT_TERMINATOR = ";"
BLOCK_SEPARATOR = "\n\n"
OPERAND_INDENT = "\t"

FUNCTION_TEMPLATE_SEPARATOR = "_"
