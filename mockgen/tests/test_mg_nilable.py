#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from conftest import FIXTURE_PKG, interface
from mg_context import GenerationContext, LogLevel
from mg_declarations import DeclarationSet
from mg_nilable import Extraction, NilabilityClassifier
from mg_types import (
    AnyInterface, Array, ChanDir, Channel, Function, Map, Named, Pointer, Qualified, Slice,
)


@pytest.fixture
def classifier(declarations, context) -> NilabilityClassifier:
    return NilabilityClassifier(declarations, FIXTURE_PKG, context)


@pytest.mark.parametrize(
    "t",
    [
        Pointer(Named("string")),
        Slice(Named("byte")),
        Map(Named("string"), Named("int")),
        Channel(ChanDir.RECV, Named("bool")),
        Function(),
        AnyInterface(),
        Named("any"),
        Qualified("io", "Reader"),
        Named("Sibling"),
        Qualified("", "Sibling"),
        Qualified(FIXTURE_PKG, "Sibling"),
    ],
)
def test_nilable_types_are_guarded(classifier, t):
    assert classifier.is_nilable(t)
    assert classifier.classify(t) is Extraction.GUARDED


@pytest.mark.parametrize(
    "t",
    [
        Named("string"),
        Named("int"),
        Array(2, Named("string")),
        Array(2, Pointer(Named("string"))),
        Named("Err"),
        Qualified("net/http", "Response"),
        Named("struct{}"),
    ],
)
def test_non_nilable_types_are_cast_directly(classifier, t):
    assert not classifier.is_nilable(t)
    assert classifier.classify(t) is Extraction.DIRECT


def test_error_uses_error_slot(classifier):
    assert classifier.classify(Named("error")) is Extraction.ERROR_SLOT
    assert classifier.classify(Qualified("", "error")) is Extraction.ERROR_SLOT
    assert classifier.classify(Pointer(Named("error"))) is Extraction.GUARDED


def test_interface_added_to_declarations_is_nilable(context):
    decls = DeclarationSet()
    decls.add_interface(interface("Requester"))
    classifier = NilabilityClassifier(decls, FIXTURE_PKG, context)

    assert classifier.classify(Named("Requester")) is Extraction.GUARDED


def test_undeclared_named_type_is_reported_once(declarations, capsys):
    ctx = GenerationContext(log_level=LogLevel.WARNING)
    classifier = NilabilityClassifier(declarations, FIXTURE_PKG, ctx)

    assert classifier.classify(Qualified("example.com/other", "Thing")) is Extraction.DIRECT
    assert classifier.classify(Qualified("example.com/other", "Thing")) is Extraction.DIRECT

    err = capsys.readouterr().err
    assert err.count("'example.com/other.Thing'") == 1
    assert "treating it as non-nilable" in err


def test_silent_context_suppresses_warning(classifier, capsys):
    classifier.classify(Named("Unknown"))

    assert capsys.readouterr().err == ""
