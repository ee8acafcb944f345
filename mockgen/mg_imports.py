"""
Import Resolver

Owns the import table of one generated mock: which packages are referenced,
and which local identifier each one is spelled with.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Dict, Iterable, List, Set

from mg_types import natural_package_name, sanitize_identifier


@dataclass(frozen=True)
class ImportEntry:
    package: str
    local_name: str

    @property
    def alias(self) -> str:
        """Explicit import name, or '' when the last path segment already matches."""
        last = self.package.rstrip("/").rsplit("/", 1)[-1]
        return "" if self.local_name == last else self.local_name

    def format(self) -> str:
        if self.alias:
            return f'import {self.alias} "{self.package}"'
        return f'import "{self.package}"'


class ImportResolver:
    """
    Per-interface import table.

    Identifiers reserved for other uses (parameters, generated locals, the
    recorder package) are never handed out to an import. Registration is
    idempotent, and the table keeps first-registration order.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self._reserved: Set[str] = set(reserved)
        self._entries: Dict[str, ImportEntry] = {}
        self._taken: Set[str] = set()

    def reserve(self, name: str) -> None:
        """Mark `name` as used by something other than an import."""
        self._reserved.add(name)

    def is_reserved(self, name: str) -> bool:
        return name in self._reserved

    def register(self, package: str) -> str:
        entry = self._entries.get(package)
        if entry is not None:
            return entry.local_name

        local = self._pick_name(package)
        self._entries[package] = ImportEntry(package=package, local_name=local)
        self._taken.add(local)
        return local

    def local_name(self, package: str) -> str:
        """Identifier for a package, registering it on first sight."""
        return self.register(package)

    def __contains__(self, package: str) -> bool:
        return package in self._entries

    def finalize(self) -> List[ImportEntry]:
        return list(self._entries.values())

    def _is_free(self, name: str) -> bool:
        return bool(name) and name not in self._reserved and name not in self._taken

    def _pick_name(self, package: str) -> str:
        natural = natural_package_name(package) or "pkg"
        if self._is_free(natural):
            return natural

        qualified = sanitize_identifier("".join(s for s in package.split("/") if s))
        if self._is_free(qualified):
            return qualified

        n = 2
        while not self._is_free(f"{qualified}{n}"):
            n += 1
        return f"{qualified}{n}"
