"""Command-line entry point for faceted.

Usage:
  facet --help
  facet --version
  facet compose --persona coder --policy coding --instruction ./task.md \
      --facets-dir ./facets --max-chars 4000

Named facets are looked up in ``{facets-dir}/{kind}/{name}.md``; paths and
inline text are accepted wherever a reference is expected.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING, NoReturn

from faceted import __version__
from faceted.compose import compose
from faceted.config import resolve_config
from faceted.errors import ConfigurationError
from faceted.loader import build_facet_set

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

PROG = "facet"
DESCRIPTION = "facet - Faceted Prompting CLI"
VERSION = __version__
_USAGE_HINT = "Use --help for usage information."


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.exit(1, f"Error: {message}. {_USAGE_HINT}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the ``facet`` argument parser."""
    parser = _Parser(prog=PROG, description=DESCRIPTION)
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=VERSION,
        help="Display version information",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    cmd = commands.add_parser(
        "compose",
        help="Compose facets into a system prompt and user message",
        description="Resolve facet references and print the composed prompt.",
    )
    cmd.add_argument("--persona", help="Persona reference (system prompt)")
    cmd.add_argument(
        "--policy",
        action="append",
        default=[],
        dest="policies",
        help="Policy reference (repeatable)",
    )
    cmd.add_argument(
        "--knowledge",
        action="append",
        default=[],
        help="Knowledge reference (repeatable)",
    )
    cmd.add_argument("--instruction", help="Instruction reference")
    cmd.add_argument(
        "--additional",
        action="append",
        default=[],
        dest="additional_instructions",
        help="Additional instruction reference (repeatable)",
    )
    cmd.add_argument(
        "--facets-dir",
        action="append",
        default=[],
        type=Path,
        dest="facet_dirs",
        help="Facet root searched as {dir}/{kind}/{name}.md (repeatable, first wins)",
    )
    cmd.add_argument(
        "--base-dir", type=Path, default=None, help="Base directory for relative paths"
    )
    cmd.add_argument(
        "--max-chars",
        type=int,
        default=None,
        help="Character budget for policy and knowledge blocks",
    )
    cmd.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help="Template variable; NAME alone binds true (repeatable)",
    )
    cmd.add_argument("--json", action="store_true", help="Print the prompt as JSON")
    cmd.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser


def parse_variables(pairs: Sequence[str]) -> dict[str, str | bool]:
    """Parse ``NAME=VALUE`` pairs; a bare ``NAME`` binds ``True``."""
    variables: dict[str, str | bool] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not name:
            raise ConfigurationError(
                f"Invalid template variable {pair!r}",
                hint="Use --var NAME=VALUE or --var NAME.",
            )
        variables[name] = value if sep else True
    return variables


def _report(err: ConfigurationError) -> None:
    msg = f"Error: {err}"
    if err.hint:
        msg = f"{msg}. {err.hint}"
    print(msg, file=sys.stderr)


def _run_compose(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )
    try:
        config = resolve_config(
            {
                "context_max_chars": args.max_chars,
                "facet_dirs": tuple(args.facet_dirs) or None,
                "base_dir": args.base_dir,
            }
        )
        variables = parse_variables(args.var) if args.var else None
    except ConfigurationError as e:
        _report(e)
        return 1

    facets = build_facet_set(
        base_dir=config.base_dir,
        facet_dirs=config.facet_dirs,
        persona=args.persona,
        policies=args.policies,
        knowledge=args.knowledge,
        instruction=args.instruction,
        additional_instructions=args.additional_instructions,
        variables=variables,
    )
    if facets.is_empty():
        log.warning("no facets resolved; the composed prompt is empty")
    prompt = compose(facets, config.compose_options)

    if args.json:
        payload = {
            "system_prompt": prompt.system_prompt,
            "user_message": prompt.user_message,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print("=== system ===")
        print(prompt.system_prompt)
        print("=== user ===")
        print(prompt.user_message)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry: returns the process exit status."""
    arg_list = list(sys.argv[1:] if argv is None else argv)
    if not arg_list:
        print(f"Error: No arguments provided. {_USAGE_HINT}", file=sys.stderr)
        return 1

    parser = build_parser()
    try:
        args = parser.parse_args(arg_list)
    except SystemExit as exc:
        # --help / --version exit 0; usage errors exit 1.
        return exc.code if isinstance(exc.code, int) else 1

    if args.command == "compose":
        return _run_compose(args)

    print(f"Error: No command given. {_USAGE_HINT}", file=sys.stderr)
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
