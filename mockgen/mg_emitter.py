"""
Mock Emitter

Composes the generated file for one interface: optional prologue and note,
the mock type declaration, and one block per method in name order.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import re
from dataclasses import dataclass, field
from typing import List, Optional

from mg_context import GenerationContext
from mg_declarations import DeclarationSet
from mg_imports import ImportEntry, ImportResolver
from mg_interface import Interface
from mg_logger import log_debug
from mg_nilable import NilabilityClassifier
from mg_signatures import OK_VAR, OVERRIDE_VAR, RECEIVER, RET_VAR, RenderedMethod, SignatureRenderer, generated_locals

_NOTE_LINE_SPLIT_RE = re.compile(r"\\n|\r?\n")


@dataclass
class GoCodeBuilder:
    """
    Helper for building Go code with indentation tracking.
    """
    lines: List[str] = field(default_factory=list)
    indent_level: int = 0
    indent_str: str = "\t"

    def indent(self) -> None:
        self.indent_level += 1

    def dedent(self) -> None:
        assert self.indent_level > 0, "dedent below zero"
        self.indent_level -= 1

    def emit(self, line: str = "") -> None:
        """Emit a line with current indentation."""
        if line:
            self.lines.append(self.indent_str * self.indent_level + line)
        else:
            self.lines.append("")

    def to_string(self) -> str:
        if not self.lines:
            return ""
        return "\n".join(self.lines) + "\n"


def exported_mock_name(interface_name: str, is_exported: bool, prefix: str = "mock") -> str:
    """`Requester` stays as is; `requester` becomes `mockRequester`."""
    if is_exported:
        return interface_name
    return f"{prefix}{interface_name[:1].upper()}{interface_name[1:]}"


class MockGenerator:
    """
    Generates the mock for a single interface.

    Output accumulates in `out` across calls, so a caller can emit the
    prologue, then a note, then the mock itself. Import naming is planned once
    for the whole interface before anything is written.
    """

    def __init__(
            self,
            iface: Interface,
            declarations: Optional[DeclarationSet] = None,
            context: Optional[GenerationContext] = None,
    ):
        self.iface = iface
        self.context = context or GenerationContext.default()
        self.mock_name = exported_mock_name(iface.name, iface.is_exported, self.context.mock_prefix)
        self.imports = ImportResolver()
        self.classifier = NilabilityClassifier(declarations, iface.package_path, self.context)
        self.renderer = SignatureRenderer(iface, self.imports, self.classifier, self.context)
        self.out = GoCodeBuilder()
        self.self_package: Optional[str] = None
        self._planned = False

    def get_output(self) -> str:
        return self.out.to_string()

    # ============================================================================
    # Planning
    # ============================================================================

    def plan(self) -> None:
        """
        Fix every name before rendering: parameter names and generated locals
        are reserved first, then the declaring package, then referenced packages
        in method-name order.
        """
        if self._planned:
            return
        methods = self.iface.sorted_methods()

        self.imports.reserve(self.context.recorder_name)
        self.imports.reserve(self.mock_name)
        max_results = max((len(m.results) for m in methods), default=0)
        for name in generated_locals(max_results):
            self.imports.reserve(name)
        for m in methods:
            for name in self.renderer.parameter_names(m):
                self.imports.reserve(name)

        # the prologue imports the declaring package, so it claims a name first
        if not self.context.in_package:
            self.self_package = self.iface.package_path or self.iface.import_path(self.context.source_root)
            self.imports.register(self.self_package)

        for m in methods:
            self.renderer.validate(m)
            self.renderer.discover_imports(m)

        self._planned = True
        log_debug(
            self.context,
            f"Planned {len(methods)} method(s), {len(self.imports.finalize())} import(s) for '{self.iface.name}'",
        )

    def import_entries(self) -> List[ImportEntry]:
        """External imports, excluding the interface's own package."""
        self.plan()
        return [
            e for e in self.imports.finalize()
            if e.package not in (self.self_package, self.iface.package_path or None)
        ]

    # ============================================================================
    # Prologue
    # ============================================================================

    def generate_prologue(self, package: str) -> None:
        self.plan()
        out = self.out
        out.emit(f"package {package}")
        out.emit()

        if not self.context.in_package:
            local = self.iface.import_path(self.context.source_root)
            self_name = self.imports.local_name(self.self_package)
            out.emit(ImportEntry(package=local, local_name=self_name).format())
        out.emit(ImportEntry(package=self.context.recorder_import, local_name=self.context.recorder_name).format())
        out.emit()

        entries = self.import_entries()
        for entry in entries:
            out.emit(entry.format())
        if entries:
            out.emit()

    def generate_prologue_note(self, note: str) -> None:
        if not note:
            return
        self.out.emit()
        for line in _NOTE_LINE_SPLIT_RE.split(note):
            self.out.emit(f"// {line}")
        self.out.emit()

    # ============================================================================
    # Mock type
    # ============================================================================

    def generate(self) -> None:
        self.plan()
        out = self.out
        out.emit(f"// {self.mock_name} is an autogenerated mock type for the {self.iface.name} type")
        out.emit(f"type {self.mock_name} struct {{")
        out.indent()
        out.emit(f"{self.context.recorder_name}.Mock")
        out.dedent()
        out.emit("}")

        for method in self.iface.sorted_methods():
            out.emit()
            self.emit_method(self.renderer.render(method))

    def emit_method(self, rendered: RenderedMethod) -> None:
        out = self.out
        out.emit(rendered.doc_comment)
        out.emit(f"func ({RECEIVER} *{self.mock_name}) {rendered.signature} {{")
        out.indent()
        out.emit(rendered.call)

        for block in rendered.extractions:
            out.emit()
            out.emit(f"var {block.var} {block.type_text}")
            out.emit(f"if {OVERRIDE_VAR}, {OK_VAR} := {RET_VAR}.Get({block.index}).({block.override_type}); {OK_VAR} {{")
            out.indent()
            out.emit(f"{block.var} = {block.override_call}")
            out.dedent()
            out.emit("} else {")
            out.indent()
            if block.guard is not None:
                out.emit(f"if {block.guard} {{")
                out.indent()
                out.emit(f"{block.var} = {block.accessor}")
                out.dedent()
                out.emit("}")
            else:
                out.emit(f"{block.var} = {block.accessor}")
            out.dedent()
            out.emit("}")

        if rendered.return_stmt is not None:
            out.emit()
            out.emit(rendered.return_stmt)
        out.dedent()
        out.emit("}")
