"""Composable API functions for the compile → render → bind pipeline.

Each function corresponds to a CLI workflow (--template-only, --stats, bound
program) but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging
from collections import Counter

from .args import Arg, arg_placeholder
from .bindings import (
    Binding,
    BindingResolver,
    CallContext,
    apply_bindings,
    placeholders_in,
)
from .config import CompilerConfig
from .errors import MalformedTemplate
from .manifest import Manifest
from .registry import Registry
from .scheduler import compile_call
from .targets import FunctionTarget, MethodTarget
from .template_cache import TemplateCache

logger = logging.getLogger(__name__)


def render_template(target: MethodTarget | FunctionTarget) -> str:
    """Compile *target* and render its generic, placeholder-parameterised text."""
    return compile_call(target).build()


def opcode_stats(manifest: Manifest) -> dict[str, int]:
    """Return a frequency map of opcode names in a compiled manifest."""
    return dict(Counter(inst.opcode.value for inst in manifest.instructions()))


def check_template(
    generic: str,
    args: list[Arg],
    arg_bindings: list[Binding],
    location: str,
) -> None:
    """Reject a cached template that was compiled for a different argument list.

    Every argument binding needs a placeholder in *generic*, and every
    non-ephemeral argument must appear in its generic rendering (so an
    ``Array<()>`` template cannot take a ``u8`` vector). A template whose
    arguments changed shape has to be regenerated.

    Raises:
        MalformedTemplate: naming *location* and the offending placeholders.
    """
    present = set(placeholders_in(generic))
    unbound = [b.placeholder for b in arg_bindings if b.placeholder not in present]
    if unbound:
        raise MalformedTemplate(
            location, f"no placeholder for argument binding(s): {', '.join(unbound)}"
        )

    mismatched: list[str] = []
    for index, arg in enumerate(args):
        if arg.is_ephemeral():
            continue
        expected = arg.to_generic(arg_placeholder(index))
        if expected not in generic:
            mismatched.append(expected)
    if mismatched:
        raise MalformedTemplate(
            location, f"argument rendering(s) not found: {', '.join(mismatched)}"
        )


def build_program(
    target: MethodTarget | FunctionTarget,
    registry: Registry,
    context: CallContext,
    cache: TemplateCache | None = None,
    config: CompilerConfig = CompilerConfig(),
    extra_bindings: list[Binding] | None = None,
) -> str:
    """Produce the final program text for one invocation of *target*.

    Args:
        target: The method or function to call.
        registry: Name registry snapshot used to resolve bindings.
        context: Caller (and optional fee payer) of this invocation.
        cache: Optional template cache; without one the template is
            recompiled on every call.
        config: Compiler settings; the fee lock amount is bound from here.
        extra_bindings: Additional bindings for hand-written templates.
            Unlike argument bindings, extras without a placeholder are
            ignored.

    Returns:
        The program text with every placeholder substituted.
    """
    resolver = BindingResolver(registry, config)
    arg_bindings = resolver.resolve(target.arguments())

    if cache is None:
        generic = render_template(target)
    else:
        name = target.name()
        generic = cache.get_or_create(name, lambda: render_template(target))
        check_template(generic, target.arguments(), arg_bindings, cache.location(name))

    bindings = resolver.context_bindings(target, context)
    bindings.extend(arg_bindings)
    bindings.extend(extra_bindings or [])
    program = apply_bindings(generic, bindings)
    logger.info(
        "Built program for %s (%d bytes, %d bindings)",
        target.name(),
        len(program),
        len(bindings),
    )
    return program
