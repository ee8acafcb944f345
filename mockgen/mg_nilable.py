"""
Nilability classification of result types.

Decides how a scripted return value is pulled back out of the recorder's
loosely typed argument list: through the error shortcut, through a cast
guarded by a nil check, or through a plain cast.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from enum import Enum
from typing import Optional, Set, Tuple

from mg_context import GenerationContext
from mg_declarations import DeclarationSet, TypeKind
from mg_logger import log_warning
from mg_types import (
    GO_PREDECLARED_TYPES,
    TypeExpr, Named, Qualified, Pointer, Slice, Map, Channel, Function, AnyInterface,
    is_error_type,
)

_PREDECLARED_INTERFACES = ("error", "any")


class Extraction(Enum):
    ERROR_SLOT = "error"    # ret.Error(i)
    GUARDED = "guarded"     # if ret.Get(i) != nil { ... }
    DIRECT = "direct"       # ret.Get(i).(T), panics on absent values


class NilabilityClassifier:
    """
    Classifies type expressions against the declarations the parser exposed.

    Named types are never guessed from their spelling: an undeclared one is
    treated as concrete and reported once as a warning.
    """

    def __init__(
            self,
            declarations: Optional[DeclarationSet],
            package_path: str = "",
            context: Optional[GenerationContext] = None,
    ):
        self.declarations = declarations or DeclarationSet()
        self.package_path = package_path
        self.context = context or GenerationContext.default()
        self._reported: Set[Tuple[str, str]] = set()

    def is_nilable(self, t: TypeExpr) -> bool:
        if isinstance(t, (Pointer, Slice, Map, Channel, Function, AnyInterface)):
            return True
        if isinstance(t, Named):
            return self._is_interface(self.package_path, t.name)
        if isinstance(t, Qualified):
            return self._is_interface(t.package or self.package_path, t.name)
        # arrays hold their elements by value
        return False

    def classify(self, t: TypeExpr) -> Extraction:
        if is_error_type(t):
            return Extraction.ERROR_SLOT
        if self.is_nilable(t):
            return Extraction.GUARDED
        return Extraction.DIRECT

    def _is_interface(self, package: str, name: str) -> bool:
        kind = self.declarations.kind_of(package, name)
        if kind is not None:
            return kind is TypeKind.INTERFACE
        if package == self.package_path and name in GO_PREDECLARED_TYPES:
            return name in _PREDECLARED_INTERFACES
        if not name.isidentifier():
            # type literal such as struct{} or interface{ Close() error }
            return name.startswith("interface")
        if (package, name) not in self._reported:
            self._reported.add((package, name))
            spelled = f"{package}.{name}" if package else name
            log_warning(
                self.context,
                f"warning: cannot tell whether '{spelled}' is an interface (declaration not parsed); "
                f"treating it as non-nilable",
            )
        return False
