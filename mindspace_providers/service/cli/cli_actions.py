"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``mindspace-cli``, keeping the entrypoint minimal.
This module has no top-level side effects and is safe to import in tests.

Fallback & Error Semantics
--------------------------
- ``run`` without ``--execute`` is a dry-run: it inspects configuration and
  credentials and performs no network I/O.
- ``run --execute`` goes through :class:`ChatOrchestrator`, so vendor failures
  produce a local fallback reply rather than an error exit.
- Usage errors are printed as JSON to stderr with exit code ``2``.
- API keys are only ever printed masked.
"""

from __future__ import annotations

import argparse
import json
import sys
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from ...base.factory import AdapterRegistry
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.models import ChatSelection
from ...base.repositories import CredentialResolver, mask_api_key
from ...config import get_gateway_config, get_vendor_settings
from ...config.env import get_env_var_candidates
from ...config.vendors import VENDORS, get_vendor_config
from ...persistence import InMemoryKeyStore, SqliteKeyStore
from ..chat_service import ChatOrchestrator

_logger = get_logger("mindspace.cli")


def _err(payload: Dict[str, Any], code: int = 2) -> int:
    print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
    return code


@contextmanager
def open_resolver(keys_db: Optional[str]) -> Iterator[CredentialResolver]:
    """Yield a resolver backed by the SQLite key file, or an empty in-memory store."""
    if not keys_db:
        yield CredentialResolver(InMemoryKeyStore())
        return
    store = SqliteKeyStore(keys_db)
    try:
        yield CredentialResolver(store)
    finally:
        store.close()


def _selection(vendor: Optional[str], model: Optional[str]) -> ChatSelection:
    cfg = get_gateway_config({"vendor": vendor, "model": model})
    return ChatSelection(vendor=cfg["vendor"], model=cfg.get("model") or None)


def load_history(path: Optional[str]) -> List[Dict[str, Any]]:
    """Read a JSON list of ``{role, content}`` objects; no path means no history."""
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError("history file must contain a JSON list")
    return data


def plan_run(
    *,
    vendor: Optional[str],
    model: Optional[str],
    prompt: Optional[str],
    stream: bool,
    resolver: CredentialResolver,
) -> Dict[str, Any]:
    """Compute a dry-run plan for one chat turn without I/O.

    Returns
    -------
    Dict[str, Any]
        JSON-serializable summary: resolved vendor/model, credential source,
        whether the orchestrator would call the vendor or fall back locally.
    """
    selection = _selection(vendor, model)
    entry = get_vendor_config(selection.vendor)
    credential = resolver.resolve(selection.vendor) if entry else None
    settings = get_vendor_settings(selection.vendor)
    configured = resolver.is_configured(selection.vendor)
    return {
        "vendor": selection.vendor,
        "model": selection.model or settings.get("model"),
        "api_base": settings.get("api_base"),
        "prompt_preview": (f"{prompt[:64]}..." if (prompt and len(prompt) > 64) else prompt),
        "stream_requested": stream,
        "vendor_supported": entry is not None,
        "credential_source": credential.source.value if credential else None,
        "api_key": mask_api_key(credential.key) if credential and credential.present else None,
        "would_use_fallback": not configured,
    }


def execute_run(
    *,
    vendor: Optional[str],
    model: Optional[str],
    prompt: str,
    stream: bool,
    history: List[Dict[str, Any]],
    resolver: CredentialResolver,
    as_json: bool = False,
) -> int:
    """Run one chat turn through the orchestrator and print the reply.

    Streaming prints fragments as they arrive; ``--json`` prints the full
    reply object afterwards instead of the plain text.
    """
    selection = _selection(vendor, model)
    ctx = LogContext(vendor=selection.vendor, model=selection.model)
    normalized_log_event(_logger, "cli.start", ctx, phase="start", stream=stream)
    orchestrator = ChatOrchestrator(AdapterRegistry(resolver=resolver), selection)

    streamed: List[str] = []

    def _on_stream(delta: str) -> None:
        streamed.append(delta)
        if not as_json:
            sys.stdout.write(delta)
            sys.stdout.flush()

    reply = orchestrator.send_chat_message(history, prompt, on_stream=_on_stream if stream else None)
    if as_json:
        print(json.dumps(reply.to_dict(), ensure_ascii=False))
    else:
        if streamed:
            print()
        if not streamed or reply.fallback_used:
            print(reply.content)
    normalized_log_event(
        _logger,
        "cli.finalize",
        ctx,
        phase="finalize",
        fallback=reply.fallback_used,
        crisis=reply.is_crisis,
    )
    return 0


def handle_run(args: argparse.Namespace) -> int:
    """Execute the default ``run`` subcommand (plan or execute)."""
    with open_resolver(args.keys_db) as resolver:
        if not args.execute:
            plan = plan_run(
                vendor=args.vendor,
                model=args.model,
                prompt=args.prompt,
                stream=args.stream,
                resolver=resolver,
            )
            print(json.dumps(plan, ensure_ascii=False))
            return 0
        if not args.prompt or not args.prompt.strip():
            return _err({"error": "--prompt is required with --execute"})
        try:
            history = load_history(args.history)
        except (OSError, ValueError) as exc:
            return _err({"error": f"cannot read history: {exc}"})
        return execute_run(
            vendor=args.vendor,
            model=args.model,
            prompt=args.prompt,
            stream=bool(args.stream),
            history=history,
            resolver=resolver,
            as_json=bool(args.json),
        )


def vendor_rows(resolver: CredentialResolver) -> List[Dict[str, Any]]:
    rows = []
    for cfg in VENDORS.values():
        credential = resolver.resolve(cfg.id)
        rows.append(
            {
                "id": cfg.id,
                "name": cfg.display_name,
                "default_model": get_vendor_settings(cfg.id).get("model"),
                "requires_api_key": cfg.requires_api_key,
                "env": list(get_env_var_candidates(cfg.id)),
                "configured": resolver.is_configured(cfg.id),
                "credential_source": credential.source.value,
            }
        )
    return rows


def handle_vendors(args: argparse.Namespace) -> int:
    """List the vendor table with per-vendor configuration status."""
    with open_resolver(args.keys_db) as resolver:
        rows = vendor_rows(resolver)
    if args.json:
        print(json.dumps({"vendors": rows}, ensure_ascii=False))
        return 0
    for row in rows:
        status = "configured" if row["configured"] else "missing key"
        print(f"{row['id']:<10} {row['name']:<22} {row['default_model']:<32} {status}")
    return 0


def handle_validate(args: argparse.Namespace) -> int:
    """Probe the vendor with ``--key`` (or the resolved credential).

    Exit code ``0`` when the vendor accepted the key, ``1`` otherwise.
    """
    with open_resolver(args.keys_db) as resolver:
        key = args.key if args.key is not None else resolver.get_api_key(args.vendor)
        adapter = AdapterRegistry(resolver=resolver).get_adapter(args.vendor)
        valid = adapter.validate_key(key)
    print(json.dumps({"vendor": args.vendor, "key": mask_api_key(key), "valid": valid}))
    return 0 if valid else 1


def handle_keys(args: argparse.Namespace) -> int:
    """List, save or delete locally stored keys in the SQLite key file."""
    if args.action in ("set", "delete") and not args.vendor:
        return _err({"error": f"--vendor is required for keys {args.action}"})
    if args.action == "set" and not (args.key or "").strip():
        return _err({"error": "--key is required for keys set"})
    store = SqliteKeyStore(args.keys_db)
    try:
        if args.action == "set":
            store.set_api_key(args.vendor, args.key.strip())
        elif args.action == "delete":
            store.delete_api_key(args.vendor)
        stored = {v: mask_api_key(store.get_api_key(v)) for v in store.list_vendors()}
    finally:
        store.close()
    print(json.dumps({"keys": stored}))
    return 0


__all__ = [
    "open_resolver",
    "load_history",
    "plan_run",
    "execute_run",
    "handle_run",
    "vendor_rows",
    "handle_vendors",
    "handle_validate",
    "handle_keys",
]
