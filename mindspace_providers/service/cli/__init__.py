"""MindSpace gateway CLI (package entrypoint).

This package wires argument parsing to action handlers in ``cli_actions``.
It performs no vendor logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
- ``plan_run``: Dry-run planner used by tests
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_keys, handle_run, handle_validate, handle_vendors, plan_run
from .cli_parser import SUBCOMMANDS, build_parser

_HANDLERS = {
	"vendors": handle_vendors,
	"validate": handle_validate,
	"keys": handle_keys,
}


def main(argv: Optional[list[str]] = None) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.

	Returns
	-------
	int
		Process exit code (0 success, non-zero on error).
	"""
	p = build_parser()
	# Inject default subcommand "run" when omitted.
	argv_list = list(sys.argv[1:] if argv is None else argv)
	if not argv_list or (argv_list[0] not in SUBCOMMANDS and argv_list[0] not in {"-h", "--help"}):
		argv_list = ["run"] + argv_list
	args = p.parse_args(argv_list)
	return _HANDLERS.get(args.cmd, handle_run)(args)


__all__ = ["main", "plan_run"]


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
