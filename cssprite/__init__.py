"""Pack images into a single horizontal sprite strip plus a matching stylesheet."""

__version__ = "0.1.0"
