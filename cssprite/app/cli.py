"""Command line entry point: ``cssprite -s SOURCE -t TARGET``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from cssprite_config import load_config

from ..core.errors import ConfigurationError, SpriteError
from ..core.pipeline import describe_elapsed, generate_sprite
from ..tools.discovery import SUPPORTED_EXTENSIONS, find_images
from ..tools.logging_config import configure_logging

logger = logging.getLogger("cssprite")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cssprite",
        description="For generating an image sprite and CSS file.",
    )
    parser.add_argument("-s", "--source", help="Directory with images for generating sprite.")
    parser.add_argument("-t", "--target", help="Output directory where the image and css file are generated.")
    parser.add_argument("--sheet-name", help="File name of the sprite image (default from config: SpriteImage.png)")
    parser.add_argument("--css-name", help="File name of the stylesheet (default from config: style.css)")
    parser.add_argument("--prefix", help="Prefix added to every generated class name")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    return parser


def _ensure_target(target: Path) -> None:
    if target.is_dir():
        return
    if target.exists():
        raise ConfigurationError(f"Target {target} exists and is not a directory.")
    logger.info("Directory %s not found. Creating it.", target)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"Could not create {target}: {exc}") from exc
    logger.info("%s Created.", target)


def run(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    sprite_cfg = config["sprite"]
    if not args.source:
        logger.error("Error: Source directory not specified.")
        return 1
    if not args.target:
        logger.error("Error: Target directory not specified.")
        return 1

    source = Path(args.source)
    target = Path(args.target)
    if not source.is_dir():
        logger.error("Error: Directory %s not found.", source)
        return 1

    try:
        files = find_images(source, sprite_cfg.get("extensions") or SUPPORTED_EXTENSIONS)
        if not files:
            logger.error("Error: Couldn't find any images in %s", source)
            return 1
        _ensure_target(target)
        result = generate_sprite(
            files,
            target,
            sheet_name=args.sheet_name or sprite_cfg.get("sheet_name", "SpriteImage.png"),
            stylesheet_name=args.css_name or sprite_cfg.get("stylesheet_name", "style.css"),
            selector_prefix=args.prefix if args.prefix is not None else sprite_cfg.get("selector_prefix", ""),
        )
    except SpriteError as exc:
        logger.error("Error: %s", exc)
        return 1
    except Exception as exc:
        logger.exception("Unhandled exception: %s", exc)
        raise

    logger.info(
        "Generated sprite image and css successfully in %s (%d images, %dx%d)",
        describe_elapsed(result.elapsed),
        result.count,
        result.width,
        result.height,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    level = "DEBUG" if args.verbose else args.log_level or os.getenv("CSSPRITE_LOG_LEVEL")
    try:
        config = load_config()
    except ConfigurationError as exc:
        configure_logging(level)
        logger.error("Error: %s", exc)
        return 1

    configure_logging(level or config["logging"].get("level"))
    return run(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
