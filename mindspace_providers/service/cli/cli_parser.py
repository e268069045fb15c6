"""CLI parser construction for mindspace-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...config.vendors import supported_vendor_ids

SUBCOMMANDS = ("run", "vendors", "validate", "keys")


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    ``None`` (flag given without a value) maps to ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean (``--stream``, ``--stream false``).
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def _add_keys_db(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--keys-db",
        default=None,
        help="SQLite file holding locally saved API keys (default: none, environment only)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``run`` (default), ``vendors``, ``validate`` and ``keys``
        subcommands. No I/O happens here.
    """
    vendors = list(supported_vendor_ids())
    p = argparse.ArgumentParser(
        prog="mindspace-cli", description="MindSpace chat gateway CLI (safe by default: dry-run)"
    )
    sub = p.add_subparsers(dest="cmd")

    # run
    p_run = sub.add_parser("run", help="Plan or execute one chat turn (default)")
    p_run.add_argument("--vendor", default=None, help="Vendor id; defaults to the gateway config")
    p_run.add_argument("--model", default=None)
    p_run.add_argument("--prompt", default=None)
    p_run.add_argument(
        "--history",
        default=None,
        help="JSON file with prior turns: a list of {role, content} objects",
    )
    add_stream_flags(p_run)
    p_run.add_argument("--execute", action="store_true")
    p_run.add_argument("--json", action="store_true")
    _add_keys_db(p_run)

    # vendors
    p_vendors = sub.add_parser("vendors", help="List supported vendors and whether each is configured")
    p_vendors.add_argument("--json", action="store_true")
    _add_keys_db(p_vendors)

    # validate
    p_validate = sub.add_parser("validate", help="Probe a vendor with an API key")
    p_validate.add_argument("--vendor", required=True, choices=vendors)
    p_validate.add_argument("--key", default=None, help="Key to probe; defaults to the resolved credential")
    _add_keys_db(p_validate)

    # keys
    p_keys = sub.add_parser("keys", help="Manage locally saved API keys")
    p_keys.add_argument("action", choices=("list", "set", "delete"))
    p_keys.add_argument("--vendor", default=None, choices=vendors)
    p_keys.add_argument("--key", default=None)
    p_keys.add_argument("--keys-db", required=True)

    return p


__all__ = ["SUBCOMMANDS", "add_stream_flags", "build_parser"]
