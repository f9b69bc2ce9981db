"""Composable pull-based read and write streams, with transforms, reducers and JSON/CSV encoders."""

__version__ = "0.1.0"

__all__ = [
    "base",
    "memory",
    "utils",
    "reduce",
    "tuples",
    "zero",
    "transforms",
    "grouping",
    "textio",
    "channel",
    "decoders",
    "database",
    "pipes",
]