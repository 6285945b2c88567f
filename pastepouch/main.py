#!/usr/bin/env python3
"""
PastePouch entry point.

Usage:
  python -m pastepouch [--env-file .env] [--target local|remote] [--mode http|cli] [--log-level INFO]

Without --target/--mode the storage target and front end are asked for
interactively.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from pastepouch.core.config import (
    FrontEnd,
    StorageTarget,
    choose_front_end,
    choose_storage_target,
    get_settings,
    load_environment,
)
from pastepouch.core.errors import ConfigurationError
from pastepouch.core.log import configure_logging
from pastepouch.db import create_all, make_engine
from pastepouch.repositories.paste_repository import PasteRepository
from pastepouch.services.operations import PasteService

logger = logging.getLogger(__name__)

TARGETS = {"local": StorageTarget.LOCAL, "remote": StorageTarget.REMOTE}
MODES = {"http": FrontEnd.HTTP, "cli": FrontEnd.CLI}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pastepouch", description="Paste storage over HTTP or an interactive menu")
    ap.add_argument("--env-file", default=".env", help=".env file holding DB_USER/DB_PASS (default: .env)")
    ap.add_argument("--target", choices=sorted(TARGETS), help="storage target (default: ask)")
    ap.add_argument("--mode", choices=sorted(MODES), help="front end (default: ask)")
    ap.add_argument("--log-level", help="overrides LOG_LEVEL")
    return ap


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        load_environment(args.env_file)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    target = TARGETS[args.target] if args.target else choose_storage_target()
    try:
        url = settings.database_url_for(target)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc
    logger.info("Using %s storage", target.name.lower())

    try:
        engine = make_engine(url)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to open database: {exc}") from exc
    try:
        create_all(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise SystemExit(f"Failed to create tables: {exc}") from exc

    service = PasteService(PasteRepository(engine))
    try:
        mode = MODES[args.mode] if args.mode else choose_front_end()
        if mode is FrontEnd.HTTP:
            from pastepouch.app import create_app, serve

            serve(create_app(service, settings), settings)
        else:
            from pastepouch.cli import PasteMenu

            PasteMenu(service).run()
    except KeyboardInterrupt:
        sys.stderr.write("\n")
        raise SystemExit(130)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
