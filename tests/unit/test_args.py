"""Tests for the argument model: type tags, generic forms, validation."""

import pytest
from pydantic import ValidationError

from manifest_compiler.args import (
    Arg,
    ArgKind,
    account,
    arg_placeholder,
    boolean,
    component,
    decimal,
    enum,
    fungible_bucket,
    fungible_proof,
    i32,
    integer,
    map_of,
    non_fungible_address,
    non_fungible_id,
    package,
    precise_decimal,
    resource,
    string,
    synthetic_placeholder,
    tuple_of,
    u8,
    u64,
    unit,
    vec_of,
)


class TestPlaceholderNaming:
    def test_top_level_placeholder(self):
        assert arg_placeholder(3) == "arg_3"

    def test_synthetic_placeholder_appends_suffix(self):
        assert synthetic_placeholder("arg_3", "resource") == "arg_3_resource"
        assert synthetic_placeholder("arg_3", 0) == "arg_3_0"


class TestTypeTag:
    def test_scalar_tags(self):
        assert unit().type_tag() == "()"
        assert boolean(True).type_tag() == "bool"
        assert u8(1).type_tag() == "u8"
        assert i32(-1).type_tag() == "i32"
        assert string("x").type_tag() == "String"
        assert decimal(1).type_tag() == "Decimal"
        assert precise_decimal(1).type_tag() == "PreciseDecimal"

    def test_named_reference_tags(self):
        assert package("p").type_tag() == "PackageAddress"
        assert component("c").type_tag() == "ComponentAddress"
        assert account("a").type_tag() == "ComponentAddress"
        assert resource("r").type_tag() == "ResourceAddress"

    def test_vec_tag_uses_first_element(self):
        assert vec_of(u64(1), u64(2)).type_tag() == "Array<u64>"

    def test_empty_vec_tag_defaults_to_unit(self):
        assert vec_of().type_tag() == "Array<()>"

    def test_nested_vec_tag(self):
        assert vec_of(vec_of(u8(1))).type_tag() == "Array<Array<u8>>"

    def test_map_tag_uses_first_entry(self):
        arg = map_of((string("a"), u8(1)), (string("b"), u8(2)))
        assert arg.type_tag() == "Map<String, u8>"

    def test_empty_map_tag_defaults_to_unit_pair(self):
        assert map_of().type_tag() == "Map<(), ()>"

    def test_request_tags(self):
        assert fungible_bucket("usd", 1).type_tag() == "Bucket"
        assert fungible_proof("usd", 1).type_tag() == "Proof"


class TestToGeneric:
    def test_unit_has_no_placeholder(self):
        assert unit().to_generic("arg_0") == "()"

    def test_bool_is_bare_token(self):
        assert boolean(False).to_generic("arg_0") == "${arg_0}"

    def test_integer_carries_width_suffix(self):
        assert u8(5).to_generic("arg_1") == "${arg_1}u8"
        assert integer(ArgKind.I128, -5).to_generic("arg_1") == "${arg_1}i128"

    def test_string_is_quoted(self):
        assert string("x").to_generic("arg_0") == '"${arg_0}"'

    def test_quoted_kinds_wrap_in_tag(self):
        assert decimal("1.5").to_generic("arg_0") == 'Decimal("${arg_0}")'
        assert resource("usd").to_generic("arg_2") == 'ResourceAddress("${arg_2}")'

    def test_containers_wrap_single_placeholder(self):
        assert tuple_of(u8(1), string("a")).to_generic("arg_0") == "Tuple(${arg_0})"
        assert vec_of(u8(1)).to_generic("arg_0") == "Array<u8>(${arg_0})"
        assert enum("Some", u8(1)).to_generic("arg_0") == "Enum(${arg_0})"
        assert map_of((string("a"), u8(1))).to_generic("arg_0") == (
            "Map<String, u8>(${arg_0})"
        )

    def test_non_fungible_id_delegates_to_inner(self):
        assert non_fungible_id(u64(7)).to_generic("arg_0") == "NonFungibleId(${arg_0}u64)"
        assert non_fungible_id(string("a")).to_generic("arg_0") == (
            'NonFungibleId("${arg_0}")'
        )

    def test_non_fungible_address_combines_resource_and_id(self):
        arg = non_fungible_address("ticket", u64(7))
        assert arg.to_generic("arg_4") == (
            'NonFungibleAddress("${arg_4_resource}", ${arg_4_id}u64)'
        )


class TestValidation:
    def test_integer_out_of_range(self):
        with pytest.raises(ValidationError):
            u8(256)

    def test_negative_unsigned(self):
        with pytest.raises(ValidationError):
            u64(-1)

    def test_bool_is_not_an_integer(self):
        with pytest.raises(ValidationError):
            Arg(kind=ArgKind.U8, value=True)

    def test_bool_requires_bool(self):
        with pytest.raises(ValidationError):
            Arg(kind=ArgKind.BOOL, value=1)

    def test_integer_helper_rejects_non_integer_kind(self):
        with pytest.raises(ValueError):
            integer(ArgKind.STRING, 1)

    def test_fungible_request_needs_amount(self):
        with pytest.raises(ValidationError):
            Arg(kind=ArgKind.FUNGIBLE_BUCKET, value="usd")

    def test_vec_must_be_homogeneous(self):
        with pytest.raises(ValidationError):
            vec_of(u8(1), string("a"))

    def test_nested_bucket_rejected(self):
        with pytest.raises(ValidationError):
            tuple_of(fungible_bucket("usd", 1))

    def test_nested_proof_in_map_rejected(self):
        with pytest.raises(ValidationError):
            map_of((string("a"), fungible_proof("usd", 1)))

    def test_named_reference_needs_name(self):
        with pytest.raises(ValidationError):
            Arg(kind=ArgKind.RESOURCE)

    def test_parses_from_json_like_dict(self):
        arg = Arg.model_validate(
            {
                "kind": "TUPLE",
                "elements": [
                    {"kind": "U8", "value": 3},
                    {"kind": "RESOURCE", "value": "usd"},
                ],
            }
        )
        assert [e.kind for e in arg.elements] == [ArgKind.U8, ArgKind.RESOURCE]

    def test_nested_bucket_rejected_from_dict(self):
        with pytest.raises(ValidationError):
            Arg.model_validate(
                {
                    "kind": "VEC",
                    "elements": [
                        {"kind": "FUNGIBLE_BUCKET", "value": "usd", "amount": "2"}
                    ],
                }
            )

    def test_decimal_amount_kept_exact(self):
        assert decimal("0.1").amount + decimal("0.2").amount == decimal("0.3").amount
