"""
Maintenance CLI for the models.dev metadata cache.

CLI Examples:
    python -m tenex_providers.utils.models_dev_cli refresh
    python -m tenex_providers.utils.models_dev_cli limits --provider anthropic --model claude-opus-4-5-20251101
    python -m tenex_providers.utils.models_dev_cli info --provider openrouter --model openai/gpt-4o --json
    python -m tenex_providers.utils.models_dev_cli list --provider openai --limit 10
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from ..base.errors import RETRYABLE_CODES, ProviderError, classify_exception
from ..base.logging import configure_logger, get_logger, log_event
from ..base.timeouts import get_timeout_config
from ..config.defaults import MODELS_CLI_DEFAULT_LIST_LIMIT
from ..models_dev import ModelsDevCache, get_default_cache

_logger = get_logger("tenex.cli")


def _parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse command-line arguments for the cache maintenance CLI.

    Args:
        argv: List of command-line arguments.

    Returns:
        An argparse.Namespace containing parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="tenex-models", description="Inspect and refresh the models.dev metadata cache"
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    parser.add_argument("--log-level", default=None, help="Override log level (e.g. DEBUG)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("refresh", help="Force a refresh from models.dev and rewrite the disk cache")

    for name, help_text in (
        ("limits", "Show context/output limits for a model"),
        ("info", "Show the full catalogue record for a model"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--provider", required=True)
        p.add_argument("--model", required=True)

    p_list = sub.add_parser("list", help="List a provider's models, newest first")
    p_list.add_argument("--provider", required=True)
    p_list.add_argument(
        "--limit",
        type=int,
        default=MODELS_CLI_DEFAULT_LIST_LIMIT,
        help=f"Maximum rows (default {MODELS_CLI_DEFAULT_LIST_LIMIT}, 0 for all)",
    )
    return parser.parse_args(argv)


def _emit(payload: Dict[str, Any], as_json: bool, text: str) -> None:
    print(json.dumps(payload, indent=2) if as_json else text)


def _cmd_refresh(cache: ModelsDevCache, args: argparse.Namespace) -> int:
    try:
        cache.refresh_cache()
    except ProviderError as exc:
        err = {"ok": False, "code": exc.code.value, "error": exc.message, "retryable": exc.retryable}
        print(json.dumps(err), file=sys.stderr)
        return 1
    except OSError as exc:
        code = classify_exception(exc)
        err = {
            "ok": False,
            "code": code.value,
            "error": f"Failed to write {cache.store.path}: {exc}",
            "retryable": code in RETRYABLE_CODES,
        }
        print(json.dumps(err), file=sys.stderr)
        return 1
    snapshot = cache.snapshot or {}
    models = sum(
        len(section.get("models") or {}) for section in snapshot.values() if isinstance(section, dict)
    )
    payload = {"ok": True, "providers": len(snapshot), "models": models, "path": cache.store.path}
    _emit(payload, args.json, f"Refreshed {models} models from {len(snapshot)} providers -> {cache.store.path}")
    return 0


def _cmd_limits(cache: ModelsDevCache, args: argparse.Namespace) -> int:
    limits = cache.get_model_limits(args.provider, args.model)
    payload = {"provider": args.provider, "model": args.model, "limits": limits.to_dict() if limits else None}
    text = f"context={limits.context} output={limits.output}" if limits else "unknown"
    _emit(payload, args.json, text)
    return 0 if limits else 2


def _cmd_info(cache: ModelsDevCache, args: argparse.Namespace) -> int:
    info = cache.get_model_info(args.provider, args.model)
    if info is None:
        _emit({"provider": args.provider, "model": args.model, "info": None}, args.json, "unknown")
        return 2
    _emit({"provider": args.provider, "model": args.model, "info": info.to_dict()}, args.json, json.dumps(info.to_dict(), indent=2))
    return 0


def _cmd_list(cache: ModelsDevCache, args: argparse.Namespace) -> int:
    models = cache.get_provider_models(args.provider)
    if args.limit and args.limit > 0:
        models = models[: args.limit]
    if args.json:
        print(json.dumps([m.to_dict() for m in models], indent=2))
        return 0
    if not models:
        print(f"No models.dev models for provider '{args.provider}'")
        return 0
    for m in models:
        context = (m.limit or {}).get("context")
        print(f"- {m.id:40} {m.last_updated or '-':10} context={context if context is not None else '-'}")
    return 0


_COMMANDS = {
    "refresh": _cmd_refresh,
    "limits": _cmd_limits,
    "info": _cmd_info,
    "list": _cmd_list,
}


def main(argv: Optional[List[str]] = None, cache: Optional[ModelsDevCache] = None) -> int:
    """Entry point for the models.dev cache CLI.

    Args:
        argv: Optional list of command-line arguments (defaults to ``sys.argv``).
        cache: Optional cache instance; defaults to the process-wide cache.

    Returns:
        Exit code: 0 on success, 1 when a forced refresh fails (fetch or disk
        write), 2 when a looked-up model is unknown.
    """
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if args.log_level:
        configure_logger(level=args.log_level)
    cache = cache if cache is not None else get_default_cache()
    log_event(_logger, "cli.models_dev", command=args.cmd)
    if args.cmd != "refresh":
        cache.ensure_cache_loaded()
    try:
        return _COMMANDS[args.cmd](cache, args)
    finally:
        # Let a stale-triggered refresh finish writing before the process exits.
        cache.wait_for_background_refresh(timeout=get_timeout_config().http_timeout_seconds)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
