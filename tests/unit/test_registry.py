"""Tests for the ledger name registry."""

import pytest

from manifest_compiler.errors import ManifestError, UnknownRegistryName
from manifest_compiler.registry import EntityKind, LedgerRegistry


class TestLookup:
    def test_lookup_by_kind(self, registry):
        assert registry.lookup(EntityKind.RESOURCE, "usd") == "R1"
        assert registry.lookup(EntityKind.COMPONENT, "gumball") == "component_sim1gumball"

    def test_names_are_case_insensitive(self, registry):
        assert registry.lookup(EntityKind.RESOURCE, "USD") == "R1"

    def test_wrong_kind_is_unknown(self, registry):
        with pytest.raises(UnknownRegistryName) as excinfo:
            registry.lookup(EntityKind.ACCOUNT, "usd")
        assert excinfo.value.kind == "account"

    def test_unknown_name_error_hierarchy(self, registry):
        with pytest.raises(ManifestError):
            registry.lookup(EntityKind.RESOURCE, "doesnotexist")
        with pytest.raises(KeyError):
            registry.lookup(EntityKind.RESOURCE, "doesnotexist")

    def test_error_message_is_readable(self, registry):
        with pytest.raises(UnknownRegistryName) as excinfo:
            registry.lookup(EntityKind.RESOURCE, "doesnotexist")
        assert str(excinfo.value) == "No resource registered under name 'doesnotexist'"


class TestGetAddress:
    def test_searches_every_table(self, registry):
        assert registry.get_address("alice") == "account_sim1alice"
        assert registry.get_address("gumball_pkg") == "package_sim1gumball"

    def test_unknown(self, registry):
        with pytest.raises(UnknownRegistryName):
            registry.get_address("nobody")


class TestRegistration:
    def test_duplicate_name_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.add_resource("Usd", "R9")

    def test_same_name_in_different_kinds(self):
        reg = LedgerRegistry()
        reg.add_account("gumball", "account_sim1")
        reg.add_component("gumball", "component_sim1")
        assert reg.lookup(EntityKind.ACCOUNT, "gumball") == "account_sim1"
        assert reg.lookup(EntityKind.COMPONENT, "gumball") == "component_sim1"

    def test_fungibility(self, registry):
        assert registry.is_fungible("R1") is True
        assert registry.is_fungible("R2") is False

    def test_fungibility_of_unknown_address(self, registry):
        with pytest.raises(UnknownRegistryName):
            registry.is_fungible("R404")


class TestFromDict:
    def test_builds_all_tables(self):
        reg = LedgerRegistry.from_dict(
            {
                "accounts": {"default": "account_sim1"},
                "components": {"gumball": "component_sim1"},
                "packages": {"pkg": "package_sim1"},
                "resources": {
                    "usd": "R1",
                    "ticket": {"address": "R2", "fungible": False},
                },
            }
        )
        assert reg.lookup(EntityKind.PACKAGE, "pkg") == "package_sim1"
        assert reg.is_fungible("R1") is True
        assert reg.is_fungible("R2") is False

    def test_missing_sections_are_empty(self):
        reg = LedgerRegistry.from_dict({})
        with pytest.raises(UnknownRegistryName):
            reg.get_address("anything")
