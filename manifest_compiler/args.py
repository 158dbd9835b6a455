"""Argument Model — typed, nameable call inputs and their generic renderings."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator

from . import constants


class ArgKind(str, Enum):
    UNIT = "UNIT"
    BOOL = "BOOL"
    # Fixed-width integers
    I8 = "I8"
    I16 = "I16"
    I32 = "I32"
    I64 = "I64"
    I128 = "I128"
    U8 = "U8"
    U16 = "U16"
    U32 = "U32"
    U64 = "U64"
    U128 = "U128"
    STRING = "STRING"
    # Containers
    ENUM = "ENUM"
    TUPLE = "TUPLE"
    VEC = "VEC"
    MAP = "MAP"
    # Precision numerics
    DECIMAL = "DECIMAL"
    PRECISE_DECIMAL = "PRECISE_DECIMAL"
    # Named references, resolved through the registry
    PACKAGE = "PACKAGE"
    COMPONENT = "COMPONENT"
    ACCOUNT = "ACCOUNT"
    RESOURCE = "RESOURCE"
    # Ephemeral resource requests
    FUNGIBLE_BUCKET = "FUNGIBLE_BUCKET"
    NON_FUNGIBLE_BUCKET = "NON_FUNGIBLE_BUCKET"
    FUNGIBLE_PROOF = "FUNGIBLE_PROOF"
    NON_FUNGIBLE_PROOF = "NON_FUNGIBLE_PROOF"
    # Composite ids
    NON_FUNGIBLE_ADDRESS = "NON_FUNGIBLE_ADDRESS"
    NON_FUNGIBLE_ID = "NON_FUNGIBLE_ID"
    # Raw literals passed through verbatim
    EXPRESSION = "EXPRESSION"
    BLOB = "BLOB"
    HASH = "HASH"
    ECDSA_SECP256K1_PUBLIC_KEY = "ECDSA_SECP256K1_PUBLIC_KEY"
    ECDSA_SECP256K1_SIGNATURE = "ECDSA_SECP256K1_SIGNATURE"
    EDDSA_ED25519_PUBLIC_KEY = "EDDSA_ED25519_PUBLIC_KEY"
    EDDSA_ED25519_SIGNATURE = "EDDSA_ED25519_SIGNATURE"


INTEGER_RANGES: dict[ArgKind, tuple[int, int]] = {
    ArgKind.I8: (-(2**7), 2**7 - 1),
    ArgKind.I16: (-(2**15), 2**15 - 1),
    ArgKind.I32: (-(2**31), 2**31 - 1),
    ArgKind.I64: (-(2**63), 2**63 - 1),
    ArgKind.I128: (-(2**127), 2**127 - 1),
    ArgKind.U8: (0, 2**8 - 1),
    ArgKind.U16: (0, 2**16 - 1),
    ArgKind.U32: (0, 2**32 - 1),
    ArgKind.U64: (0, 2**64 - 1),
    ArgKind.U128: (0, 2**128 - 1),
}

DECIMAL_KINDS: frozenset[ArgKind] = frozenset(
    {ArgKind.DECIMAL, ArgKind.PRECISE_DECIMAL}
)

NAMED_REFERENCE_KINDS: frozenset[ArgKind] = frozenset(
    {ArgKind.PACKAGE, ArgKind.COMPONENT, ArgKind.ACCOUNT, ArgKind.RESOURCE}
)

RAW_LITERAL_KINDS: frozenset[ArgKind] = frozenset(
    {
        ArgKind.EXPRESSION,
        ArgKind.BLOB,
        ArgKind.HASH,
        ArgKind.ECDSA_SECP256K1_PUBLIC_KEY,
        ArgKind.ECDSA_SECP256K1_SIGNATURE,
        ArgKind.EDDSA_ED25519_PUBLIC_KEY,
        ArgKind.EDDSA_ED25519_SIGNATURE,
    }
)

# Rendered as Tag("${placeholder}")
QUOTED_KINDS: frozenset[ArgKind] = DECIMAL_KINDS | NAMED_REFERENCE_KINDS | RAW_LITERAL_KINDS

CONTAINER_KINDS: frozenset[ArgKind] = frozenset(
    {ArgKind.ENUM, ArgKind.TUPLE, ArgKind.VEC, ArgKind.MAP}
)

BUCKET_KINDS: frozenset[ArgKind] = frozenset(
    {ArgKind.FUNGIBLE_BUCKET, ArgKind.NON_FUNGIBLE_BUCKET}
)
PROOF_KINDS: frozenset[ArgKind] = frozenset(
    {ArgKind.FUNGIBLE_PROOF, ArgKind.NON_FUNGIBLE_PROOF}
)
EPHEMERAL_KINDS: frozenset[ArgKind] = BUCKET_KINDS | PROOF_KINDS
FUNGIBLE_REQUEST_KINDS: frozenset[ArgKind] = frozenset(
    {ArgKind.FUNGIBLE_BUCKET, ArgKind.FUNGIBLE_PROOF}
)

_FIXED_TAGS: dict[ArgKind, str] = {
    ArgKind.UNIT: "()",
    ArgKind.BOOL: "bool",
    ArgKind.STRING: "String",
    ArgKind.ENUM: "Enum",
    ArgKind.TUPLE: "Tuple",
    ArgKind.DECIMAL: "Decimal",
    ArgKind.PRECISE_DECIMAL: "PreciseDecimal",
    ArgKind.PACKAGE: "PackageAddress",
    ArgKind.COMPONENT: "ComponentAddress",
    ArgKind.ACCOUNT: "ComponentAddress",
    ArgKind.RESOURCE: "ResourceAddress",
    ArgKind.FUNGIBLE_BUCKET: "Bucket",
    ArgKind.NON_FUNGIBLE_BUCKET: "Bucket",
    ArgKind.FUNGIBLE_PROOF: "Proof",
    ArgKind.NON_FUNGIBLE_PROOF: "Proof",
    ArgKind.NON_FUNGIBLE_ADDRESS: "NonFungibleAddress",
    ArgKind.NON_FUNGIBLE_ID: "NonFungibleId",
    ArgKind.EXPRESSION: "Expression",
    ArgKind.BLOB: "Blob",
    ArgKind.HASH: "Hash",
    ArgKind.ECDSA_SECP256K1_PUBLIC_KEY: "EcdsaSecp256k1PublicKey",
    ArgKind.ECDSA_SECP256K1_SIGNATURE: "EcdsaSecp256k1Signature",
    ArgKind.EDDSA_ED25519_PUBLIC_KEY: "EddsaEd25519PublicKey",
    ArgKind.EDDSA_ED25519_SIGNATURE: "EddsaEd25519Signature",
}


# ── Placeholder naming ───────────────────────────────────────────


def placeholder(name: str) -> str:
    """Render *name* as a ``${name}`` token."""
    return constants.PLACEHOLDER_TEMPLATE.format(name=name)


def arg_placeholder(index: int) -> str:
    """Placeholder name of the top-level argument at position *index*."""
    return f"{constants.ARG_PLACEHOLDER_PREFIX}{index}"


def synthetic_placeholder(parent: str, suffix: int | str) -> str:
    """Derive a child placeholder name, e.g. ``arg_2`` → ``arg_2_resource``."""
    return f"{parent}_{suffix}"


def decimal_text(value: Decimal) -> str:
    """Plain (non-exponent) text of a decimal, e.g. ``Decimal("1E+3")`` → ``1000``."""
    return format(value, "f")


# ── Argument node ────────────────────────────────────────────────


class Arg(BaseModel):
    """One node of a call-argument tree.

    Payload fields are shared across kinds:

    - ``value``: scalar value, referenced entity name, enum variant name or
      resource name (ephemeral requests, NON_FUNGIBLE_ADDRESS).
    - ``elements``: ENUM fields, TUPLE/VEC items, the id of a
      NON_FUNGIBLE_ADDRESS or the inner value of a NON_FUNGIBLE_ID.
    - ``entries``: MAP key/value pairs, in insertion order.
    - ``amount``: DECIMAL/PRECISE_DECIMAL value and fungible request amounts.
    - ``ids``: non-fungible ids of NON_FUNGIBLE_BUCKET/NON_FUNGIBLE_PROOF.
    """

    kind: ArgKind
    value: Any = None
    elements: list[Arg] = []
    entries: list[tuple[Arg, Arg]] = []
    amount: Decimal | None = None
    ids: list[str] = []

    @model_validator(mode="after")
    def _check_shape(self) -> Arg:
        kind = self.kind
        if kind in INTEGER_RANGES:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise ValueError(f"{kind.value} argument needs an integer value")
            lo, hi = INTEGER_RANGES[kind]
            if not lo <= self.value <= hi:
                raise ValueError(
                    f"{self.value} is out of range for {kind.value} ([{lo}, {hi}])"
                )
        elif kind == ArgKind.BOOL and not isinstance(self.value, bool):
            raise ValueError("BOOL argument needs a boolean value")
        elif (
            kind == ArgKind.STRING
            or kind == ArgKind.ENUM
            or kind == ArgKind.NON_FUNGIBLE_ADDRESS
            or kind in NAMED_REFERENCE_KINDS
            or kind in RAW_LITERAL_KINDS
            or kind in EPHEMERAL_KINDS
        ) and not isinstance(self.value, str):
            raise ValueError(f"{kind.value} argument needs a string value")

        if (kind in DECIMAL_KINDS or kind in FUNGIBLE_REQUEST_KINDS) and (
            self.amount is None
        ):
            raise ValueError(f"{kind.value} argument needs an amount")
        if kind in (ArgKind.NON_FUNGIBLE_ADDRESS, ArgKind.NON_FUNGIBLE_ID) and (
            len(self.elements) != 1
        ):
            raise ValueError(f"{kind.value} argument wraps exactly one id")
        if kind == ArgKind.VEC and len({e.type_tag() for e in self.elements}) > 1:
            raise ValueError("VEC elements must all share one type")

        for child in self.children():
            if child.is_ephemeral():
                raise ValueError(
                    f"{child.kind.value} can only be passed as a top-level call argument"
                )
        return self

    def children(self) -> list[Arg]:
        """Direct sub-arguments, map entries flattened key-then-value."""
        flattened = [node for pair in self.entries for node in pair]
        return list(self.elements) + flattened

    def is_ephemeral(self) -> bool:
        return self.kind in EPHEMERAL_KINDS

    def is_proof(self) -> bool:
        return self.kind in PROOF_KINDS

    def type_tag(self) -> str:
        """Manifest type name of this argument.

        Maps are tagged ``Map<K, V>`` after their first entry and their
        literals read ``Map<K, V>(k => v, ...)``; VEC is ``Array<T>(...)``.
        """
        if self.kind in INTEGER_RANGES:
            return self.kind.value.lower()
        if self.kind == ArgKind.VEC:
            inner = self.elements[0].type_tag() if self.elements else "()"
            return f"Array<{inner}>"
        if self.kind == ArgKind.MAP:
            if not self.entries:
                return "Map<(), ()>"
            key, val = self.entries[0]
            return f"Map<{key.type_tag()}, {val.type_tag()}>"
        return _FIXED_TAGS[self.kind]

    def to_generic(self, name: str) -> str:
        """Render this argument with ``${name}`` in place of its literal."""
        token = placeholder(name)
        tag = self.type_tag()
        if self.kind == ArgKind.UNIT:
            return "()"
        if self.kind == ArgKind.BOOL:
            return token
        if self.kind in INTEGER_RANGES:
            return f"{token}{tag}"
        if self.kind == ArgKind.STRING:
            return f'"{token}"'
        if self.kind in QUOTED_KINDS:
            return f'{tag}("{token}")'
        if self.kind == ArgKind.NON_FUNGIBLE_ID:
            return f"{tag}({self.elements[0].to_generic(name)})"
        if self.kind == ArgKind.NON_FUNGIBLE_ADDRESS:
            resource = placeholder(synthetic_placeholder(name, constants.RESOURCE_SUFFIX))
            nf_id = self.elements[0].to_generic(
                synthetic_placeholder(name, constants.ID_SUFFIX)
            )
            return f'{tag}("{resource}", {nf_id})'
        return f"{tag}({token})"


Arg.model_rebuild()


# ── Constructors ─────────────────────────────────────────────────


def unit() -> Arg:
    return Arg(kind=ArgKind.UNIT)


def boolean(value: bool) -> Arg:
    return Arg(kind=ArgKind.BOOL, value=value)


def integer(kind: ArgKind, value: int) -> Arg:
    if kind not in INTEGER_RANGES:
        raise ValueError(f"{kind.value} is not an integer kind")
    return Arg(kind=kind, value=value)


def u8(value: int) -> Arg:
    return integer(ArgKind.U8, value)


def u32(value: int) -> Arg:
    return integer(ArgKind.U32, value)


def u64(value: int) -> Arg:
    return integer(ArgKind.U64, value)


def i32(value: int) -> Arg:
    return integer(ArgKind.I32, value)


def i64(value: int) -> Arg:
    return integer(ArgKind.I64, value)


def string(value: str) -> Arg:
    return Arg(kind=ArgKind.STRING, value=value)


def decimal(value: Decimal | int | str) -> Arg:
    return Arg(kind=ArgKind.DECIMAL, amount=Decimal(str(value)))


def precise_decimal(value: Decimal | int | str) -> Arg:
    return Arg(kind=ArgKind.PRECISE_DECIMAL, amount=Decimal(str(value)))


def enum(variant: str, *fields: Arg) -> Arg:
    return Arg(kind=ArgKind.ENUM, value=variant, elements=list(fields))


def tuple_of(*elements: Arg) -> Arg:
    return Arg(kind=ArgKind.TUPLE, elements=list(elements))


def vec_of(*elements: Arg) -> Arg:
    return Arg(kind=ArgKind.VEC, elements=list(elements))


def map_of(*entries: tuple[Arg, Arg]) -> Arg:
    return Arg(kind=ArgKind.MAP, entries=list(entries))


def package(name: str) -> Arg:
    return Arg(kind=ArgKind.PACKAGE, value=name)


def component(name: str) -> Arg:
    return Arg(kind=ArgKind.COMPONENT, value=name)


def account(name: str) -> Arg:
    return Arg(kind=ArgKind.ACCOUNT, value=name)


def resource(name: str) -> Arg:
    return Arg(kind=ArgKind.RESOURCE, value=name)


def fungible_bucket(resource_name: str, amount: Decimal | int | str) -> Arg:
    return Arg(
        kind=ArgKind.FUNGIBLE_BUCKET,
        value=resource_name,
        amount=Decimal(str(amount)),
    )


def non_fungible_bucket(resource_name: str, ids: list[str]) -> Arg:
    return Arg(kind=ArgKind.NON_FUNGIBLE_BUCKET, value=resource_name, ids=list(ids))


def fungible_proof(resource_name: str, amount: Decimal | int | str) -> Arg:
    return Arg(
        kind=ArgKind.FUNGIBLE_PROOF,
        value=resource_name,
        amount=Decimal(str(amount)),
    )


def non_fungible_proof(resource_name: str, ids: list[str]) -> Arg:
    return Arg(kind=ArgKind.NON_FUNGIBLE_PROOF, value=resource_name, ids=list(ids))


def non_fungible_id(inner: Arg) -> Arg:
    return Arg(kind=ArgKind.NON_FUNGIBLE_ID, elements=[inner])


def non_fungible_address(resource_name: str, nf_id: Arg) -> Arg:
    return Arg(kind=ArgKind.NON_FUNGIBLE_ADDRESS, value=resource_name, elements=[nf_id])


def expression(value: str) -> Arg:
    return Arg(kind=ArgKind.EXPRESSION, value=value)
