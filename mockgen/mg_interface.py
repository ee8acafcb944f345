#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from mg_types import TypeExpr


@dataclass(frozen=True)
class Parameter:
    """A method parameter; `name` is None when the declaration elided it."""
    name: Optional[str]
    type: TypeExpr

    @property
    def is_named(self) -> bool:
        return bool(self.name) and self.name != "_"


@dataclass(frozen=True)
class Method:
    name: str
    params: Tuple[Parameter, ...] = ()
    results: Tuple[TypeExpr, ...] = ()


@dataclass(frozen=True)
class Interface:
    """
    An interface as handed over by the parser.

    - path: source file that declares the interface
    - package_path: import path of the declaring package
    - methods: unique by name; declaration order carries no meaning
    """
    name: str
    path: str
    methods: Tuple[Method, ...] = ()
    package_path: str = ""

    def __post_init__(self):
        seen = set()
        for m in self.methods:
            if m.name in seen:
                raise ValueError(f"duplicate method '{m.name}' in interface '{self.name}'")
            seen.add(m.name)

    @property
    def is_exported(self) -> bool:
        return self.name[:1].isupper()

    def sorted_methods(self) -> List[Method]:
        return sorted(self.methods, key=lambda m: m.name)

    def import_path(self, source_root: Optional[Path] = None) -> str:
        """
        Import path of the declaring package, as written in a prologue.

        With a source root, it is the interface's directory relative to that
        root; otherwise `package_path`, falling back to the directory itself.
        """
        directory = os.path.dirname(self.path)
        if source_root is not None:
            return Path(os.path.relpath(directory, str(source_root))).as_posix()
        if self.package_path:
            return self.package_path
        return Path(directory).as_posix()
