"""Arena-backed WebAssembly section building blocks: types, tables, memories and producers."""

__version__ = "0.1.0"

__all__ = [
    "binary",
    "memories",
    "parse",
    "producers",
    "tables",
    "tombstone_arena",
    "ty",
    "types",
]