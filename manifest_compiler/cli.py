"""Command-line entry point: compile a JSON call description to a manifest."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation

from .api import build_program, opcode_stats, render_template
from .bindings import CallContext
from .config import CompilerConfig
from .errors import ManifestError
from .registry import LedgerRegistry
from .scheduler import compile_call
from .targets import parse_target
from .template_cache import FileTemplateStore, TemplateCache

logger = logging.getLogger(__name__)


def _load_json(path: str) -> dict:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manifest-compiler",
        description="Compile a declarative ledger call into a transaction manifest",
    )
    parser.add_argument("call", help="JSON file describing the call target")
    parser.add_argument("--registry", "-r", default=None,
                        help="JSON registry of accounts/components/packages/resources")
    parser.add_argument("--caller", "-c", default=None,
                        help="Account name signing the call (required with --registry)")
    parser.add_argument("--fee-payer", default=None,
                        help="Account or component locking the fee (default: caller)")
    parser.add_argument("--cache-dir", default=None,
                        help="Package directory whose rtm/ folder caches templates")
    parser.add_argument("--fee-lock", default=None,
                        help="Fee lock amount (default: %s)" % CompilerConfig().fee_lock_amount)
    parser.add_argument("--template-only", action="store_true",
                        help="Only print the generic template (no binding)")
    parser.add_argument("--stats", action="store_true",
                        help="Print opcode counts of the compiled manifest")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log compilation and binding steps")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    ignored = [
        flag
        for flag, value in (
            ("--caller", args.caller),
            ("--fee-payer", args.fee_payer),
            ("--fee-lock", args.fee_lock),
        )
        if value
    ]
    if ignored and not args.registry:
        print(f"error: {', '.join(ignored)} require --registry", file=sys.stderr)
        return 2

    try:
        config = (
            CompilerConfig(fee_lock_amount=Decimal(args.fee_lock))
            if args.fee_lock
            else CompilerConfig()
        )
        target = parse_target(_load_json(args.call))

        if args.stats:
            for opcode, count in sorted(opcode_stats(compile_call(target)).items()):
                print(f"{opcode:<40} {count}")
            return 0

        if args.template_only or not args.registry:
            print(render_template(target), end="")
            return 0

        if not args.caller:
            print("error: --caller is required with --registry", file=sys.stderr)
            return 2

        registry = LedgerRegistry.from_dict(_load_json(args.registry))
        cache = (
            TemplateCache(FileTemplateStore(args.cache_dir, config))
            if args.cache_dir
            else None
        )
        program = build_program(
            target,
            registry,
            CallContext(caller=args.caller, fee_payer=args.fee_payer),
            cache=cache,
            config=config,
        )
        print(program, end="")
        return 0
    except (ManifestError, ValueError, InvalidOperation, OSError) as exc:
        logger.debug("Compilation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
