"""Exceptions raised while building a sprite sheet."""

from __future__ import annotations

from typing import Optional


class SpriteError(Exception):
    """Base class for every failure that aborts a sprite run."""


class ConfigurationError(SpriteError):
    """A source or target location (or a config value) is missing or invalid."""


class EmptyInputError(SpriteError):
    """There is nothing to pack."""


class DecodeError(SpriteError):
    def __init__(self, path, cause: Optional[BaseException] = None, reason: Optional[str] = None) -> None:
        self.path = str(path)
        self.cause = cause
        self.reason = reason or (str(cause) if cause is not None else "unsupported image")
        super().__init__(f"Could not decode {self.path}: {self.reason}")


class DuplicateNameError(SpriteError):
    def __init__(self, selector: str, first: str, second: str) -> None:
        self.selector = selector
        self.first = first
        self.second = second
        super().__init__(f"Selector '.{selector}' is produced by both {first} and {second}")


class EncodeError(SpriteError):
    def __init__(self, path, cause: Optional[BaseException] = None) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Could not write {self.path}: {cause}")


__all__ = [
    "SpriteError",
    "ConfigurationError",
    "EmptyInputError",
    "DecodeError",
    "DuplicateNameError",
    "EncodeError",
]
