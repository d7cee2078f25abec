# i18n_sync/cli.py
from __future__ import annotations
import argparse, sys
from typing import List, Optional

from .config import ProjectConfig, TranslateConfig, load_context, load_project_config, resolve_api_settings
from .errors import I18nSyncError, MissingStateError
from .formatting import resolve_format_options
from .keys_ts import save_keys
from .logger import setup_logger
from .orchestrator import save_ai_translations
from .reconcile import check_status, initialize_state, sync_state
from .state import load_state

# --------- commands ---------

def cmd_init(args, pc: ProjectConfig, logger) -> int:
    initialize_state(
        pc.state_path,
        translations_path=args.translations or pc.translations_path,
        base_locale=args.base_locale or pc.base_locale,
        generate_keys=not args.no_generate_keys,
        logger=logger,
    )
    return 0

def cmd_sync(args, pc: ProjectConfig, logger) -> int:
    options = resolve_format_options(args.prettier or pc.prettier_config_path)
    return sync_state(pc.state_path, keys_output=args.out, format_options=options, logger=logger)

def cmd_status(args, pc: ProjectConfig, logger) -> int:
    return check_status(pc.state_path, logger=logger)

def cmd_check(args, pc: ProjectConfig, logger) -> int:
    logger.warning("`check` is deprecated, use `status` instead")
    return check_status(pc.state_path, logger=logger)

def cmd_generate(args, pc: ProjectConfig, logger) -> int:
    state = load_state(pc.state_path)
    if state is None:
        raise MissingStateError(pc.state_path)
    options = resolve_format_options(args.prettier or pc.prettier_config_path)
    out = save_keys(state, output_dir=args.out, options=options)
    logger.info(f"Generated {out}")
    return 0

def cmd_translate(args, pc: ProjectConfig, logger) -> int:
    # configuration is checked before touching any file
    api_url, api_key = resolve_api_settings(args.api_url or pc.api_url, args.api_key)
    cfg = TranslateConfig(
        api_url=api_url,
        api_key=api_key,
        model=args.model or pc.model,
        context=load_context(args.context or pc.context_path),
        tone=args.tone or pc.tone,
        update_all=args.update_all,
        stats=args.stats,
        chunk_size=args.chunk_size,
        max_retries=args.max_retries,
        backoff_base=args.backoff_base,
    )
    options = resolve_format_options(args.prettier or pc.prettier_config_path)
    run = save_ai_translations(pc.state_path, cfg, format_options=options, logger=logger)
    logger.info(f"Translation finished: {run.keys_added} key(s) added, {run.failed_chunks} failed chunk(s)")
    return 1 if run.errors or run.failed_chunks else 0

COMMANDS = {
    "init": cmd_init,
    "sync": cmd_sync,
    "status": cmd_status,
    "check": cmd_check,
    "translate": cmd_translate,
    "generate": cmd_generate,
}

# --------- parser ---------

def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="i18n-sync", description="Track stale translations and fill them with an AI translator")
    ap.add_argument("--config", default=None, help="Project config file (default: ./i18n-sync.yaml if present)")
    ap.add_argument("--state", default=None, help="Path of the state document")
    ap.add_argument("--log-level", default=None)
    sub = ap.add_subparsers(dest="cmd", required=True)

    i = sub.add_parser("init", help="Create the state document from the base locale")
    i.add_argument("-p", "--translations", default=None, help="Folder holding one sub-folder per locale")
    i.add_argument("-l", "--base-locale", default=None)
    i.add_argument("--no-generate-keys", action="store_true", help="Do not regenerate translation.ts on sync")

    s = sub.add_parser("sync", help="Reconcile state with the base locale files and report stale keys")
    s.add_argument("-o", "--out", default=None, help="Folder for translation.ts (default: translations path)")
    s.add_argument("-c", "--prettier", default=None, help="Path for the prettier config")

    sub.add_parser("status", help="Report stale and missing keys per locale")
    sub.add_parser("check", help="Deprecated alias of status")

    t = sub.add_parser("translate", help="Translate missing keys with the AI service")
    t.add_argument("-u", "--api-url", default=None, help="Chat-completion API URL (env OPENAI_API_URL)")
    t.add_argument("-k", "--api-key", default=None, help="API key (env OPENAI_API_KEY)")
    t.add_argument("-m", "--model", default=None)
    t.add_argument("--context", default=None, help="File with free-text context about the product")
    t.add_argument("-t", "--tone", default=None, help="Tone of the translations (default: formal)")
    t.add_argument("--update-all", action="store_true", help="Resubmit every base key, not only missing ones")
    t.add_argument("--stats", action="store_true", help="Print stale key counts per locale first")
    t.add_argument("--chunk-size", type=positive_int, default=100)
    t.add_argument("--max-retries", type=positive_int, default=3)
    t.add_argument("--backoff-base", type=float, default=1.5)
    t.add_argument("-c", "--prettier", default=None, help="Path for the prettier config")

    g = sub.add_parser("generate", help="Generate typed translation keys (translation.ts)")
    g.add_argument("-o", "--out", default=None, help="Folder for translation.ts (default: translations path)")
    g.add_argument("-c", "--prettier", default=None, help="Path for the prettier config")
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(args.log_level or "INFO")
    try:
        pc = load_project_config(args.config)
        if args.log_level is None:
            setup_logger(pc.log_level)
        if args.state:
            pc.state_path = args.state
        return COMMANDS[args.cmd](args, pc, logger)
    except I18nSyncError as e:
        logger.error(str(e))
        return 1

if __name__ == "__main__":
    sys.exit(main())
