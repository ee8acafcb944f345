"""
Signature Renderer

Renders one interface method into the pieces of its mock implementation:
the declared signature, the call forwarded to the recorder, and one
extraction block per result.

Knows Go syntax for these pieces, but not how they are laid out in a file;
that is the emitter's job.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import re
from dataclasses import dataclass, field
from typing import List, NoReturn, Optional

from mg_context import GenerationContext
from mg_errors import GenLocation, UnsupportedShapeError
from mg_imports import ImportResolver
from mg_interface import Interface, Method
from mg_nilable import Extraction, NilabilityClassifier
from mg_types import (
    TypeExpr, Qualified, Function, Variadic,
    format_type, format_signature_tail, format_results, type_children, walk_type,
)

RECEIVER = "_m"
RET_VAR = "ret"
OVERRIDE_VAR = "rf"
OK_VAR = "ok"

# Identifiers the generated body declares; a parameter may not shadow them.
_GENERATED_LOCAL_RE = re.compile(r"^(_m|ret|rf|ok|r\d+)$")


def generated_locals(result_count: int) -> List[str]:
    return [RECEIVER, RET_VAR, OVERRIDE_VAR, OK_VAR] + [f"r{i}" for i in range(result_count)]


@dataclass
class ExtractionBlock:
    """How result `index` is obtained: override function first, scripted value otherwise."""
    index: int
    var: str                # r0
    type_text: str          # *string
    override_type: str      # func(string) *string
    override_call: str      # rf(path)
    accessor: str           # ret.Get(0).(*string) or ret.Error(0)
    kind: Extraction
    guard: Optional[str] = None  # ret.Get(0) != nil


@dataclass
class RenderedMethod:
    name: str
    param_names: List[str]
    signature: str          # Get(path string) (string, error)
    call: str               # ret := _m.Called(path)
    extractions: List[ExtractionBlock] = field(default_factory=list)
    return_stmt: Optional[str] = None

    @property
    def doc_comment(self) -> str:
        return f"// {self.name} provides a mock function with given fields: {', '.join(self.param_names)}"


class SignatureRenderer:
    """
    Renders methods of one interface.

    Package spelling comes from the shared ImportResolver so that every method
    of the interface agrees on it; the resolver must already hold the
    reservations for all parameter names before the first type is rendered.
    """

    def __init__(
            self,
            iface: Interface,
            imports: ImportResolver,
            classifier: NilabilityClassifier,
            context: Optional[GenerationContext] = None,
    ):
        self.iface = iface
        self.imports = imports
        self.classifier = classifier
        self.context = context or GenerationContext.default()

    # ============================================================================
    # Naming
    # ============================================================================

    def qualify(self, package: str) -> str:
        """Local identifier for `package`; '' when no qualification is needed."""
        if not package:
            return ""
        if self.context.in_package and package == self.iface.package_path:
            return ""
        return self.imports.local_name(package)

    def format(self, t: TypeExpr) -> str:
        return format_type(t, self.qualify)

    @staticmethod
    def parameter_names(method: Method) -> List[str]:
        """
        Names the mock uses for the method's parameters, in order.

        Declared names are kept. Elided names, and names that would shadow a
        generated local, become `_a<position>`, prefixed with underscores until
        they clash with no other parameter.
        """
        declared = {p.name for p in method.params if p.is_named and not _GENERATED_LOCAL_RE.match(p.name)}
        names: List[str] = []
        for i, p in enumerate(method.params):
            if p.is_named and not _GENERATED_LOCAL_RE.match(p.name):
                names.append(p.name)
                continue
            candidate = f"_a{i}"
            while candidate in declared or candidate in names:
                candidate = f"_{candidate}"
            names.append(candidate)
        return names

    # ============================================================================
    # Planning
    # ============================================================================

    def validate(self, method: Method) -> None:
        """Reject shapes that cannot be rendered as valid Go."""
        last = len(method.params) - 1
        for i, p in enumerate(method.params):
            self._check_shape(p.type, method, variadic_ok=(i == last))
        for r in method.results:
            self._check_shape(r, method, variadic_ok=False)

    def discover_imports(self, method: Method) -> None:
        """Register every package the method's types reference, parameters first."""
        types = [p.type for p in method.params] + list(method.results)
        for t in types:
            for sub in walk_type(t):
                if isinstance(sub, Qualified):
                    self.qualify(sub.package)

    def _check_shape(self, t: TypeExpr, method: Method, variadic_ok: bool) -> None:
        if not isinstance(t, TypeExpr):
            self._fail(f"[GEN-0021] not a type expression: {t!r}", method)
        if isinstance(t, Variadic):
            if not variadic_ok:
                self._fail(f"[GEN-0020] variadic '{format_type(t)}' is only allowed as the last parameter", method)
            self._check_shape(t.inner, method, variadic_ok=False)
            return
        if isinstance(t, Function):
            last = len(t.params) - 1
            for i, p in enumerate(t.params):
                self._check_shape(p, method, variadic_ok=(i == last))
            for r in t.results:
                self._check_shape(r, method, variadic_ok=False)
            return
        for child in type_children(t):
            self._check_shape(child, method, variadic_ok=False)

    def _fail(self, message: str, method: Method) -> NoReturn:
        raise UnsupportedShapeError(message, GenLocation(interface=self.iface.name, method=method.name))

    # ============================================================================
    # Rendering
    # ============================================================================

    def render(self, method: Method) -> RenderedMethod:
        self.validate(method)
        names = self.parameter_names(method)

        params_text = ", ".join(f"{n} {self.format(p.type)}" for n, p in zip(names, method.params))
        signature = f"{method.name}({params_text}){format_results(method.results, self.qualify)}"

        # The recorder sees a variadic as the one slice it arrived in
        called = f"{RECEIVER}.Called({', '.join(names)})"
        call = f"{RET_VAR} := {called}" if method.results else called

        forwarded = list(names)
        if method.params and isinstance(method.params[-1].type, Variadic):
            forwarded[-1] = f"{forwarded[-1]}..."
        override_call = f"{OVERRIDE_VAR}({', '.join(forwarded)})"
        param_types = tuple(p.type for p in method.params)

        rendered = RenderedMethod(name=method.name, param_names=names, signature=signature, call=call)
        for i, result in enumerate(method.results):
            rendered.extractions.append(self._render_extraction(i, result, param_types, override_call))

        if method.results:
            rendered.return_stmt = "return " + ", ".join(b.var for b in rendered.extractions)
        return rendered

    def _render_extraction(
            self,
            index: int,
            result: TypeExpr,
            param_types: tuple,
            override_call: str,
    ) -> ExtractionBlock:
        type_text = self.format(result)
        kind = self.classifier.classify(result)
        getter = f"{RET_VAR}.Get({index})"
        block = ExtractionBlock(
            index=index,
            var=f"r{index}",
            type_text=type_text,
            override_type="func" + format_signature_tail(param_types, (result,), self.qualify),
            override_call=override_call,
            accessor=f"{getter}.({type_text})",
            kind=kind,
        )
        if kind is Extraction.ERROR_SLOT:
            block.accessor = f"{RET_VAR}.Error({index})"
        elif kind is Extraction.GUARDED:
            block.guard = f"{getter} != nil"
        return block
