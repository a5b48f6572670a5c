from __future__ import annotations

"""
Unit tests for the Symbol Classifier.

Verifies:
1. Owner-name validation rules.
2. Plain '::' paths, including atomic closure and shim markers.
3. Qualified '<Type as Trait>::method' forms and nested unwrapping.
4. Primitive type normalization under 'std/primitive'.
5. Rejection of aggregates, legacy-mangled and malformed symbols.
"""

import pytest

from bloaty_metafile.core.analysis.symbols import (
    classify,
    split_path,
    split_raw_symbol,
    symbol_is_owner_name,
)
from bloaty_metafile.domain.constants import MAX_QUALIFIED_NESTING


@pytest.mark.parametrize("name, expected", [
    ("[16482 Others]", False),
    ("_$LT$alloc..string..String$u20$as$u20$core..fmt..Write$GT$", False),
    ("foo bar", False),
    ("[section .text]", False),
    ("", False),
    ("llrt_utils", True),
    ("serde.json", True),
])
def test_symbol_is_owner_name(name, expected):
    """Verify owner validity rejects '..', spaces and bracket markers."""
    assert symbol_is_owner_name(name) is expected


def test_classify_plain_path():
    """Verify a plain path yields the first segment as owner."""
    assert classify("llrt_utils::clone::structured_clone") == (
        "llrt_utils",
        ["llrt_utils", "clone", "structured_clone"],
    )


def test_classify_inherent_method():
    """Verify '<Type>::method' resolves to the type's crate."""
    assert classify("<url::Url>::set_password") == ("url", ["url", "Url", "set_password"])


def test_classify_nested_trait_delegation_keeps_innermost_type():
    """Verify intermediate trait hops are dropped from nested qualified forms."""
    assert classify("<u8 as <[_]>::to_vec_in::ConvertVec>::to_vec::<>") == (
        "std",
        ["std", "primitive", "u8", "to_vec"],
    )


def test_classify_doubly_nested_receiver():
    """Verify '<<T as A>::Assoc as B>::method' keeps only T and method."""
    owner, path = classify("<<hashbrown::map::HashMap as core::A>::Assoc as core::B>::method")
    assert owner == "hashbrown"
    assert path == ["hashbrown", "map", "HashMap", "method"]


def test_classify_trait_impl_uses_receiver_type():
    """Verify the receiver type, not the trait, decides the owner."""
    owner, path = classify("<alloc::string::String as core::fmt::Write>::write_str")
    assert owner == "alloc"
    assert path == ["alloc", "string", "String", "write_str"]


def test_classify_keeps_generic_arguments_atomic():
    """Verify '::' inside generic arguments does not split segments."""
    owner, path = classify("core::ptr::drop_in_place<alloc::vec::Vec<u8>>")
    assert owner == "core"
    assert path == ["core", "ptr", "drop_in_place<alloc::vec::Vec<u8>>"]


def test_classify_closure_and_shim_markers_are_atomic():
    """Verify closure and vtable shim markers survive as single segments."""
    _, path = classify("tokio::runtime::spawn::{closure#0}::{shim:vtable#0}")
    assert path == ["tokio", "runtime", "spawn", "{closure#0}", "{shim:vtable#0}"]


@pytest.mark.parametrize("symbol, expected", [
    ("<() as core::fmt::Debug>::fmt", ["std", "primitive", "unit", "fmt"]),
    ("<(u8, u16) as core::fmt::Debug>::fmt", ["std", "primitive", "tuple", "fmt"]),
    ("<[T]>::sort", ["std", "primitive", "slice", "sort"]),
    ("<&str as core::fmt::Display>::fmt", ["std", "primitive", "str", "fmt"]),
    ("<&mut bool as core::fmt::Debug>::fmt", ["std", "primitive", "bool", "fmt"]),
    ("<*const u32 as core::fmt::Pointer>::fmt", ["std", "primitive", "u32", "fmt"]),
    ("<&'a f64 as core::fmt::Display>::fmt", ["std", "primitive", "f64", "fmt"]),
    ("<! as core::fmt::Debug>::fmt", ["std", "primitive", "never", "fmt"]),
])
def test_classify_primitive_normalization(symbol, expected):
    """Verify primitive receivers group under the std primitive branch."""
    assert classify(symbol) == ("std", expected)


def test_classify_reference_to_crate_type():
    """Verify reference qualifiers are stripped before splitting the type."""
    assert classify("<&serde_json::Value as core::fmt::Debug>::fmt") == (
        "serde_json",
        ["serde_json", "Value", "fmt"],
    )


def test_classify_trait_object_receiver():
    """Verify 'dyn' receivers resolve to the trait's crate."""
    owner, path = classify("<dyn core::any::Any>::type_id")
    assert owner == "core"
    assert path == ["core", "any", "Any", "type_id"]


def test_classify_strips_empty_decorations():
    """Verify trailing '()' and '<>' decorations are removed."""
    assert classify("mylib::init()") == ("mylib", ["mylib", "init"])
    assert classify("mylib::make<>::run") == ("mylib", ["mylib", "make", "run"])


@pytest.mark.parametrize("symbol", [
    "[1848 Others]",
    "_$LT$alloc..string..String$u20$as$u20$core..fmt..Write$GT$::write_str",
    "foo..bar::baz",
    "memcpy",
    "",
    "<url::Url",
    "<url::Url>garbage",
    "some crate::func",
])
def test_classify_rejects_unattributable_symbols(symbol):
    """Verify aggregates, legacy mangling and malformed input are unclassified."""
    assert classify(symbol) is None


def test_classify_nesting_ceiling_returns_none():
    """Verify adversarially deep nesting falls back to unclassified."""
    depth = MAX_QUALIFIED_NESTING + 5
    symbol = "<" * depth + "T" + " as A>::x" * (depth - 1) + " as A>::method"
    assert classify(symbol) is None


def test_split_path_ignores_arrow_brackets():
    """Verify '->' inside generic arguments does not close a bracket."""
    assert split_path("core::ops::FnOnce<fn() -> u8>::call_once") == [
        "core", "ops", "FnOnce<fn() -> u8>", "call_once",
    ]


def test_split_raw_symbol_falls_back_to_symbol():
    """Verify unclassified symbols always produce at least one segment."""
    assert split_raw_symbol("[1848 Others]") == ["[1848 Others]"]
    assert split_raw_symbol("::") == ["::"]
