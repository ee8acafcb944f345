#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from mg_errors import UnsupportedShapeError
from mg_types import (
    AnyInterface, Array, ChanDir, Channel, Function, Map, Named, Pointer, Qualified, Slice, Variadic,
    format_type, get_error_type, is_error_type, natural_package_name, walk_type,
)

STRING = Named("string")


@pytest.mark.parametrize(
    "t, text",
    [
        (STRING, "string"),
        (Qualified("net/http", "Request"), "http.Request"),
        (Qualified("", "Local"), "Local"),
        (Pointer(Qualified("net/http", "Request")), "*http.Request"),
        (Slice(Pointer(STRING)), "[]*string"),
        (Array(4, Named("byte")), "[4]byte"),
        (Array("sha256.Size", Named("byte")), "[sha256.Size]byte"),
        (Map(STRING, Slice(Named("int"))), "map[string][]int"),
        (Channel(ChanDir.BOTH, STRING), "chan string"),
        (Channel(ChanDir.SEND, STRING), "chan<- string"),
        (Channel(ChanDir.RECV, STRING), "<-chan string"),
        (Channel(ChanDir.BOTH, Channel(ChanDir.RECV, STRING)), "chan (<-chan string)"),
        (Channel(ChanDir.SEND, Channel(ChanDir.RECV, STRING)), "chan<- <-chan string"),
        (Function(), "func()"),
        (Function((STRING,), (Named("error"),)), "func(string) error"),
        (Function((STRING, Variadic(Named("int"))), (STRING, Named("error"))), "func(string, ...int) (string, error)"),
        (Function((), (Function((STRING,), (STRING,)),)), "func() func(string) string"),
        (Variadic(STRING), "...string"),
        (AnyInterface(), "interface{}"),
    ],
)
def test_format_type(t, text):
    assert format_type(t) == text


def test_format_type_uses_qualifier():
    t = Map(Qualified("encoding/json", "Number"), Pointer(Qualified("net/http", "Request")))

    text = format_type(t, lambda pkg: {"encoding/json": "encodingjson", "net/http": ""}[pkg])

    assert text == "map[encodingjson.Number]*Request"


def test_structural_equality_matches_rendering():
    a = Map(STRING, Array(3, Pointer(Qualified("io", "Reader"))))
    b = Map(Named("string"), Array(3, Pointer(Qualified("io", "Reader"))))
    c = Map(STRING, Array(4, Pointer(Qualified("io", "Reader"))))

    assert a == b
    assert format_type(a) == format_type(b)
    assert a != c
    assert format_type(a) != format_type(c)


def test_non_type_expression_is_rejected():
    with pytest.raises(UnsupportedShapeError) as exc:
        format_type("string")
    assert "[GEN-0021]" in exc.value.message


@pytest.mark.parametrize(
    "package, name",
    [
        ("net/http", "http"),
        ("io", "io"),
        ("gopkg.in/yaml.v2", "yaml"),
        ("github.com/jackc/pgx/v5", "pgx"),
        ("example.com/go-kit", "go_kit"),
        ("", ""),
    ],
)
def test_natural_package_name(package, name):
    assert natural_package_name(package) == name


def test_walk_type_is_preorder():
    t = Function((Pointer(STRING),), (Map(Named("int"), STRING),))

    assert list(walk_type(t)) == [
        t, Pointer(STRING), STRING, Map(Named("int"), STRING), Named("int"), STRING,
    ]


def test_helpers():
    assert get_error_type() is get_error_type()
    assert is_error_type(Named("error"))
    assert is_error_type(Qualified("", "error"))
    assert not is_error_type(Qualified("errors", "error"))
