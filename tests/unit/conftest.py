"""Shared fixtures for the manifest compiler unit tests."""

import pytest

from manifest_compiler.bindings import BindingResolver
from manifest_compiler.registry import LedgerRegistry


@pytest.fixture
def registry() -> LedgerRegistry:
    reg = LedgerRegistry()
    reg.add_account("default", "account_sim1default")
    reg.add_account("alice", "account_sim1alice")
    reg.add_component("gumball", "component_sim1gumball")
    reg.add_package("gumball_pkg", "package_sim1gumball")
    reg.add_resource("usd", "R1", fungible=True)
    reg.add_resource("ticket", "R2", fungible=False)
    reg.add_resource("admin", "R3", fungible=True)
    return reg


@pytest.fixture
def resolver(registry) -> BindingResolver:
    return BindingResolver(registry)
