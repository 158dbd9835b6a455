"""Ledger manifest compiler package."""

from .api import (  # noqa: F401
    build_program,
    check_template,
    opcode_stats,
    render_template,
)
from .bindings import (  # noqa: F401
    Binding,
    BindingResolver,
    CallContext,
    apply_bindings,
    placeholders_in,
)
from .call import ManifestCall  # noqa: F401
from .scheduler import compile_call  # noqa: F401
from .targets import FunctionTarget, MethodTarget, parse_target  # noqa: F401
