from __future__ import annotations

"""
Symbol Classifier.

Maps a demangled symbol name onto the crate that owns it and the ordered
list of path segments below that crate. Understands plain '::' paths,
qualified '<Type as Trait>::method' forms (including nested ones) and
normalizes primitive receiver types into a single 'std/primitive' branch.

The classifier is pure and stateless: records may be classified in any
order or in parallel.
"""

import re
from typing import List, Optional, Tuple

from bloaty_metafile.domain.constants import (
    MAX_QUALIFIED_NESTING,
    PRIMITIVE_NAME,
    PRIMITIVE_TYPES,
    STD_NAME,
    SYMBOL_SEPARATOR,
)

Classification = Tuple[str, List[str]]

_AGGREGATE_RX = re.compile(r"^\[\d+ Others\]$")

# Leading reference, raw pointer and trait-object qualifiers
_QUALIFIER_RX = re.compile(r"^(?:&(?:'\w+\s*)?(?:mut\s+)?|\*(?:const|mut)\s+|dyn\s+)")

_OPEN = "<{(["
_CLOSE = ">})]"
_AS = " as "
_DECORATIONS = ("<>", "()")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def symbol_is_owner_name(name: str) -> bool:
    """
    Check whether a segment can stand for an owning crate.

    Rejects empty names, names containing '..' (legacy mangled fragments)
    or a space, and bracketed markers such as '[1848 Others]'.
    """
    if not name or ".." in name or " " in name:
        return False
    if name.startswith("[") and name.endswith("]"):
        return False
    return True


def classify(symbol: str) -> Optional[Classification]:
    """
    Determine the owner and path segments of a symbol.

    Examples:
        'llrt_utils::clone::structured_clone'
            -> ('llrt_utils', ['llrt_utils', 'clone', 'structured_clone'])
        '<url::Url>::set_password'
            -> ('url', ['url', 'Url', 'set_password'])
        '<u8 as <[_]>::to_vec_in::ConvertVec>::to_vec::<>'
            -> ('std', ['std', 'primitive', 'u8', 'to_vec'])

    Only the innermost receiver type and the outermost method survive for
    nested qualified forms; intermediate trait hops are dropped.

    Args:
        symbol: Demangled symbol name.

    Returns:
        Optional[Classification]: (owner, segments) or None when the symbol
        cannot be attributed to a crate.
    """
    if not symbol or ".." in symbol or _AGGREGATE_RX.match(symbol):
        return None

    if symbol.startswith("<"):
        qualified = _parse_qualified(symbol)
        if qualified is None:
            return None
        type_expr, suffix = qualified
        head = _normalize_type(type_expr)
        if head is None:
            return None
        raw = head + (split_path(suffix) if suffix else [])
    else:
        raw = split_path(symbol)

    segments = _clean_segments(raw)
    if len(segments) < 2 or not symbol_is_owner_name(segments[0]):
        return None
    return segments[0], segments


def split_raw_symbol(symbol: str) -> List[str]:
    """
    Split an unclassified symbol for the SECTIONS branch.

    Falls back to the untouched symbol when nothing survives cleaning.
    """
    segments = _clean_segments(split_path(symbol))
    return segments or [symbol]


def split_path(text: str) -> List[str]:
    """
    Split on '::' at bracket depth zero.

    Separators nested in '<>', '{}', '()' or '[]' are kept, so generic
    arguments and markers like '{closure#0}' or '{shim:vtable#0}' stay
    atomic. The '>' of a '->' arrow does not close a bracket.
    """
    parts: List[str] = []
    depth = 0
    start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            if not _is_arrow(text, i):
                depth = max(depth - 1, 0)
        elif depth == 0 and text.startswith(SYMBOL_SEPARATOR, i):
            parts.append(text[start:i])
            i += len(SYMBOL_SEPARATOR)
            start = i
            continue
        i += 1
    parts.append(text[start:])
    return parts

# -----------------------------------------------------------------------------
# QUALIFIED FORMS
# -----------------------------------------------------------------------------

def _parse_qualified(text: str) -> Optional[Tuple[str, str]]:
    """
    Split '<Type as Trait>::suffix' into (Type, suffix).

    Returns None when the angle brackets are unbalanced or the closing
    bracket is followed by something other than '::'.
    """
    end = _match_angle(text)
    if end < 0:
        return None

    inner = text[1:end]
    rest = text[end + 1:]
    if rest.startswith(SYMBOL_SEPARATOR):
        rest = rest[len(SYMBOL_SEPARATOR):]
    elif rest:
        return None

    return _split_as(inner).strip(), rest


def _match_angle(text: str) -> int:
    """Index of the '>' closing the '<' at position 0, or -1."""
    depth = 0
    for i, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">" and not _is_arrow(text, i):
            depth -= 1
            if depth == 0:
                return i
    return -1


def _split_as(inner: str) -> str:
    """Return the type expression before a depth-zero ' as '."""
    depth = 0
    for i, ch in enumerate(inner):
        if ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            if not _is_arrow(inner, i):
                depth = max(depth - 1, 0)
        elif depth == 0 and inner.startswith(_AS, i):
            return inner[:i]
    return inner


def _normalize_type(type_expr: str) -> Optional[List[str]]:
    """
    Turn a receiver type into path segments.

    Strips reference/pointer qualifiers and unwraps nested qualified types
    iteratively, bounded by MAX_QUALIFIED_NESTING. Unit, tuple, slice and
    scalar types are grouped under 'std/primitive'.
    """
    t = type_expr.strip()
    for _ in range(MAX_QUALIFIED_NESTING):
        m = _QUALIFIER_RX.match(t)
        if m:
            t = t[m.end():].lstrip()
            continue
        if t.startswith("<"):
            qualified = _parse_qualified(t)
            if qualified is None:
                return None
            t = qualified[0]
            continue
        break
    else:
        return None

    if t == "()":
        return _primitive("unit")
    if t.startswith("("):
        return _primitive("tuple")
    if t.startswith("["):
        return _primitive("slice")
    if t == "!":
        return _primitive("never")
    if t in PRIMITIVE_TYPES:
        return _primitive(t)
    return split_path(t)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _primitive(name: str) -> List[str]:
    return [STD_NAME, PRIMITIVE_NAME, name]


def _is_arrow(text: str, i: int) -> bool:
    return text[i] == ">" and i > 0 and text[i - 1] == "-"


def _clean_segments(raw: List[str]) -> List[str]:
    """Strip trailing '<>' / '()' decorations and drop empty segments."""
    out: List[str] = []
    for seg in raw:
        seg = seg.strip()
        while seg.endswith(_DECORATIONS):
            seg = seg[:-2].rstrip()
        if seg:
            out.append(seg)
    return out
