from .errors import (
    ConfigurationError,
    DecodeError,
    DuplicateNameError,
    EmptyInputError,
    EncodeError,
    SpriteError,
)
from .images import DecodedImage, decode_image, load_images
from .packer import Placement, SpriteSheet, compute_layout, pack_images
from .pipeline import SpriteResult, generate_sprite
from .stylesheet import StyleRule, generate_stylesheet, selector_for

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "DecodedImage",
    "DuplicateNameError",
    "EmptyInputError",
    "EncodeError",
    "Placement",
    "SpriteError",
    "SpriteResult",
    "SpriteSheet",
    "StyleRule",
    "compute_layout",
    "decode_image",
    "generate_sprite",
    "generate_stylesheet",
    "load_images",
    "pack_images",
    "selector_for",
]
