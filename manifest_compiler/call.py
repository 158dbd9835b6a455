"""ManifestCall — fluent builder for one invocation of a call target."""

from __future__ import annotations

import logging

from .api import build_program
from .bindings import Binding, CallContext
from .config import CompilerConfig
from .engine import ExecutionEngine, Outcome, Receipt
from .registry import EntityKind, Registry
from .targets import FunctionTarget, MethodTarget
from .template_cache import TemplateCache

logger = logging.getLogger(__name__)


class ManifestCall:
    """Collects caller, fee payer and extra bindings, then builds or runs."""

    def __init__(
        self,
        target: MethodTarget | FunctionTarget,
        registry: Registry,
        caller: str,
        cache: TemplateCache | None = None,
        config: CompilerConfig = CompilerConfig(),
    ):
        self.target = target
        self._registry = registry
        self._caller = caller
        self._fee_payer: str | None = None
        self._cache = cache
        self._config = config
        self._extra_bindings: list[Binding] = []

    def signed_by(self, account: str) -> ManifestCall:
        self._caller = account
        return self

    def fee_paid_by(self, name: str) -> ManifestCall:
        """Lock the fee on *name* (an account or component) instead of the caller."""
        self._fee_payer = name
        return self

    def with_binding(self, placeholder: str, value: str) -> ManifestCall:
        self._extra_bindings.append(Binding(placeholder, value))
        return self

    def with_bindings(self, bindings: list[tuple[str, str]]) -> ManifestCall:
        for placeholder, value in bindings:
            self.with_binding(placeholder, value)
        return self

    def context(self) -> CallContext:
        return CallContext(caller=self._caller, fee_payer=self._fee_payer)

    def build(self) -> str:
        return build_program(
            self.target,
            self._registry,
            self.context(),
            cache=self._cache,
            config=self._config,
            extra_bindings=self._extra_bindings,
        )

    def run(
        self, engine: ExecutionEngine, expected: Outcome | None = Outcome.success()
    ) -> Receipt:
        """Build, execute and, unless *expected* is None, check the outcome."""
        program = self.build()
        signer = self._registry.lookup(EntityKind.ACCOUNT, self._caller)
        receipt = engine.execute(program, signer)
        logger.info("%s → %s (fee %s)", self.target.name(), receipt.outcome, receipt.fee_paid)
        if expected is not None:
            receipt.expect(expected)
        return receipt
