#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mg_context import GenerationContext, LogLevel
from mg_declarations import DeclarationSet, TypeKind
from mg_emitter import MockGenerator
from mg_interface import Interface, Method, Parameter
from mg_types import Named

FIXTURE_PKG = "github.com/vektra/mockery/fixtures"
FIXTURE_DIR = "/go/src/" + FIXTURE_PKG

STRING = Named("string")
ERROR = Named("error")
INT = Named("int")
BOOL = Named("bool")


def param(name, t) -> Parameter:
    return Parameter(name=name, type=t)


def method(name: str, params=(), results=()) -> Method:
    return Method(name=name, params=tuple(params), results=tuple(results))


def interface(name: str, *methods: Method, filename: str = "requester.go") -> Interface:
    return Interface(
        name=name,
        path=f"{FIXTURE_DIR}/{filename}",
        methods=tuple(methods),
        package_path=FIXTURE_PKG,
    )


@pytest.fixture
def context() -> GenerationContext:
    return GenerationContext(log_level=LogLevel.SILENT)


@pytest.fixture
def declarations() -> DeclarationSet:
    """Declarations the parser would expose for the fixture package and its imports."""
    decls = DeclarationSet()
    decls.declare_type("io", "Reader", TypeKind.INTERFACE)
    decls.declare_type("net/http", "Response", TypeKind.CONCRETE)
    decls.declare_type("encoding/json", "RawMessage", TypeKind.CONCRETE)
    decls.declare_type(FIXTURE_PKG, "Err", TypeKind.CONCRETE)
    decls.declare_type(FIXTURE_PKG, "Sibling", TypeKind.INTERFACE)
    return decls


@pytest.fixture
def generate(declarations: DeclarationSet, context: GenerationContext):
    """Generate the mock type for an interface and return the text.

    Usage:
        def test_something(generate):
            text = generate(interface("Requester", method("Get")))
    """

    def _generate(iface: Interface, ctx: GenerationContext | None = None) -> str:
        gen = MockGenerator(iface, declarations, ctx or context)
        gen.generate()
        return gen.get_output()

    return _generate
