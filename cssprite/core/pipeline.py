"""End-to-end sprite run: decode, pack, describe, write."""

from __future__ import annotations

import io
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import ConfigurationError, EmptyInputError, EncodeError
from .images import Decoder, decode_image, load_images
from .packer import SpriteSheet, pack_images
from .stylesheet import generate_stylesheet

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "SpriteImage.png"
DEFAULT_STYLESHEET_NAME = "style.css"


@dataclass(frozen=True)
class SpriteResult:
    sheet_path: Path
    stylesheet_path: Path
    width: int
    height: int
    count: int
    elapsed: float


def encode_png(sheet: SpriteSheet, name: str = DEFAULT_SHEET_NAME) -> bytes:
    buffer = io.BytesIO()
    try:
        sheet.pixels.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(name, exc) from exc
    return buffer.getvalue()


def _write_outputs(outputs: Sequence[Tuple[Path, bytes]]) -> None:
    """Write every payload or none of them.

    Payloads go to temporary siblings first and are only renamed into place
    once all of them are on disk.
    """

    staged: List[Tuple[Path, Path]] = []
    try:
        for path, payload in outputs:
            tmp = path.with_name(f".{path.name}.tmp")
            staged.append((tmp, path))
            try:
                tmp.write_bytes(payload)
            except OSError as exc:
                raise EncodeError(path, exc) from exc
        for tmp, path in staged:
            try:
                os.replace(tmp, path)
            except OSError as exc:
                raise EncodeError(path, exc) from exc
    finally:
        for tmp, _ in staged:
            if tmp.is_file():
                tmp.unlink()


def generate_sprite(
    paths: Sequence,
    target_dir,
    *,
    sheet_name: str = DEFAULT_SHEET_NAME,
    stylesheet_name: str = DEFAULT_STYLESHEET_NAME,
    selector_prefix: str = "",
    decoder: Decoder = decode_image,
) -> SpriteResult:
    """Pack ``paths`` into ``target_dir/sheet_name`` and ``target_dir/stylesheet_name``.

    Nothing is written unless every image decoded and both artifacts were
    produced. Existing outputs are overwritten.
    """
    paths = list(paths)
    if not paths:
        raise EmptyInputError("No images to pack")
    target = Path(target_dir)
    if not target.is_dir():
        raise ConfigurationError(f"Target directory {target} not found")
    if not sheet_name or not stylesheet_name:
        raise ConfigurationError("Output file names must not be empty")
    if sheet_name == stylesheet_name:
        raise ConfigurationError(f"Sprite image and stylesheet cannot share the file name {sheet_name}")

    start = time.perf_counter()
    with load_images(paths, decoder=decoder) as images:
        sheet, placements = pack_images(images)
        try:
            logger.debug("Image generated. Starting the CSS generation.")
            css = generate_stylesheet(placements, sheet_name, selector_prefix)
            png = encode_png(sheet, sheet_name)
        finally:
            sheet.close()

    sheet_path = target / sheet_name
    css_path = target / stylesheet_name
    _write_outputs([(sheet_path, png), (css_path, css.encode("utf-8"))])
    elapsed = time.perf_counter() - start

    logger.debug("Wrote %s and %s", sheet_path, css_path)
    return SpriteResult(
        sheet_path=sheet_path,
        stylesheet_path=css_path,
        width=sheet.width,
        height=sheet.height,
        count=len(placements),
        elapsed=elapsed,
    )


def describe_elapsed(seconds: float) -> str:
    whole = int(seconds)
    return f"{whole} second{'s' if whole != 1 else ''}"


__all__ = [
    "DEFAULT_SHEET_NAME",
    "DEFAULT_STYLESHEET_NAME",
    "SpriteResult",
    "describe_elapsed",
    "encode_png",
    "generate_sprite",
]
