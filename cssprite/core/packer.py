"""Single-row sprite strip layout."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from PIL import Image

from .errors import EmptyInputError
from .images import DecodedImage

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class Placement:
    name: str
    width: int
    height: int
    left: int

    @property
    def right(self) -> int:
        return self.left + self.width


@dataclass
class SpriteSheet:
    width: int
    height: int
    pixels: Image.Image

    def close(self) -> None:
        self.pixels.close()


def to_rgba(img: Image.Image) -> Image.Image:
    """Return ``img`` in RGBA mode, converting a copy only when needed."""

    return img.convert("RGBA") if img.mode != "RGBA" else img


def compute_layout(images: Sequence) -> Tuple[int, int, Tuple[Placement, ...]]:
    """Return ``(width, height, placements)`` for a left-to-right strip.

    ``images`` only needs ``name``, ``width`` and ``height`` attributes.
    """
    if not images:
        raise EmptyInputError("No images to pack")

    placements: List[Placement] = []
    cursor = 0
    height = 0
    for image in images:
        placements.append(Placement(name=image.name, width=image.width, height=image.height, left=cursor))
        cursor += image.width
        height = max(height, image.height)
    return cursor, height, tuple(placements)


def pack_images(images: Sequence[DecodedImage]) -> Tuple[SpriteSheet, Tuple[Placement, ...]]:
    """Draw ``images`` side by side, top aligned, on one transparent canvas.

    The caller owns the returned sheet and must close it.
    """
    width, height, placements = compute_layout(images)
    logger.debug("Building %dx%d sheet from %d images", width, height, len(placements))

    canvas = Image.new("RGBA", (width, height), TRANSPARENT)
    try:
        for image, placement in zip(images, placements):
            if placement.width == 0 or placement.height == 0:
                continue
            rgba = to_rgba(image.pixels)
            try:
                # plain paste copies alpha as-is; the canvas underneath is empty
                canvas.paste(rgba, (placement.left, 0))
            finally:
                if rgba is not image.pixels:
                    rgba.close()
    except BaseException:
        canvas.close()
        raise

    return SpriteSheet(width=width, height=height, pixels=canvas), placements


__all__ = ["Placement", "SpriteSheet", "TRANSPARENT", "compute_layout", "pack_images", "to_rgba"]
