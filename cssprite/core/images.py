"""Decoding source files into in-memory images.

Every decoded image holds an open Pillow buffer. :func:`load_images` is the
only supported way to get a batch of them: it is a context manager and closes
each buffer when the block exits, or as soon as one file in the batch fails to
decode.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Tuple

from PIL import Image

from .errors import DecodeError

logger = logging.getLogger(__name__)


@dataclass
class DecodedImage:
    name: str
    width: int
    height: int
    pixels: Image.Image

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def close(self) -> None:
        self.pixels.close()


Decoder = Callable[[str], DecodedImage]

# Pillow reports some corrupt chunks as SyntaxError
_DECODE_FAILURES = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def decode_image(path) -> DecodedImage:
    """Open ``path`` with Pillow and force a full decode."""

    name = str(path)
    try:
        img = Image.open(name)
    except _DECODE_FAILURES as exc:
        raise DecodeError(name, exc) from exc
    try:
        img.load()
    except _DECODE_FAILURES as exc:
        img.close()
        raise DecodeError(name, exc) from exc

    width, height = img.size
    if width <= 0 or height <= 0:
        img.close()
        raise DecodeError(name, reason=f"image has zero size ({width}x{height})")
    return DecodedImage(name=name, width=width, height=height, pixels=img)


@contextmanager
def load_images(paths: Iterable, decoder: Decoder = decode_image) -> Iterator[Tuple[DecodedImage, ...]]:
    """Decode ``paths`` in order and yield them as a tuple.

    The tuple has the same order as ``paths``. Decoding stops at the first
    failure; images decoded before it are closed before the error propagates.
    """

    with ExitStack() as stack:
        images = []
        for path in paths:
            image = decoder(path)
            stack.callback(image.close)
            images.append(image)
            logger.debug("Adding image: %s (%dx%d)", image.name, image.width, image.height)
        logger.debug("Total images: %d", len(images))
        yield tuple(images)


__all__ = ["DecodedImage", "Decoder", "decode_image", "load_images"]
