"""Rust source discovery and parsing."""

from .scanner import discover_sources, has_cargo_manifest, relative_key
from .treesitter_parser import RUST_LANGUAGE, RustParser, first_error

__all__ = [
    "discover_sources",
    "has_cargo_manifest",
    "relative_key",
    "RUST_LANGUAGE",
    "RustParser",
    "first_error",
]
