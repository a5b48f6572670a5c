from __future__ import annotations

"""
Domain Constants.

Centralizes the synthetic node names, standard-library groupings and
format limits shared by the classifier, the attribution tree and the
metafile emitter.
"""

from typing import FrozenSet

APP_NAME = "bloaty-metafile"
APP_VERSION = "0.3.0"

# -----------------------------------------------------------------------------
# TREE NAMES
# -----------------------------------------------------------------------------

ROOT_NAME = "__ROOT__"
SECTIONS_NAME = "SECTIONS"
UNKNOWN_NAME = "__UNKNOWN__"
PATH_SEPARATOR = "/"
# Stands in for PATH_SEPARATOR inside a segment (U+2215 DIVISION SLASH)
SEGMENT_SEPARATOR_ESCAPE = "\u2215"

# -----------------------------------------------------------------------------
# SYMBOL GRAMMAR
# -----------------------------------------------------------------------------

SYMBOL_SEPARATOR = "::"
STD_NAME = "std"
PRIMITIVE_NAME = "primitive"

PRIMITIVE_TYPES: FrozenSet[str] = frozenset({
    "bool", "char", "str",
    "i8", "i16", "i32", "i64", "i128", "isize",
    "u8", "u16", "u32", "u64", "u128", "usize",
    "f16", "f32", "f64", "f128",
})

# Hard ceiling for <<T as A>::B as C> unwrapping
MAX_QUALIFIED_NESTING = 64

# -----------------------------------------------------------------------------
# DEFAULTS & LIMITS
# -----------------------------------------------------------------------------

DEFAULT_OUTPUT_NAME = "bloaty"
DEFAULT_LOCK_FILE = "Cargo.lock"
STDIN_SOURCE = "<stdin>"

# V8 maximum string length; larger metafiles cannot be loaded by JS analyzers
MAX_JS_STRING_LENGTH = 0x1FFFFFE8
