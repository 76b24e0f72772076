import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from .config import Config, get_config, load_config
from .editor import run
from .log import setup_logging
from .tui.terminal import Terminal, TerminalError

logger = logging.getLogger(__name__)

parser = argparse.ArgumentParser(prog="kilo")
parser.add_argument("--config", type=Path)
parser.add_argument("--log-file", type=Path)
parser.add_argument("--log-level")
banner_group = parser.add_mutually_exclusive_group()
banner_group.add_argument("--banner")
banner_group.add_argument("--no-banner", action="store_true")


def main(argv: list[str] | None = None) -> int:
    args = parser.parse_args(argv)

    try:
        config = get_cli_config(args)
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        print(f"kilo: config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)
    logger.info("starting")

    try:
        return run(Terminal(), config)
    except TerminalError as e:
        logger.error("fatal: %s", e)
        print(f"kilo: {e}", file=sys.stderr)
        return 1


def get_cli_config(args: argparse.Namespace) -> Config:
    config_path = cast(Path | None, args.config)
    config = get_config() if config_path is None else load_config(config_path)

    updates: dict[str, object] = {}
    logging_updates: dict[str, object] = {}
    screen_updates: dict[str, object] = {}

    if args.log_file is not None:
        logging_updates["file"] = cast(Path, args.log_file)
    if args.log_level is not None:
        logging_updates["level"] = cast(str, args.log_level)
    if args.no_banner:
        screen_updates["banner"] = ""
    elif args.banner is not None:
        screen_updates["banner"] = cast(str, args.banner)

    if logging_updates:
        updates["logging"] = config.logging.model_copy(update=logging_updates)
    if screen_updates:
        updates["screen"] = config.screen.model_copy(update=screen_updates)

    return config.model_copy(update=updates)
