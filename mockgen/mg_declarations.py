#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from mg_errors import GenLocation, NotFoundError
from mg_interface import Interface


class TypeKind(Enum):
    INTERFACE = auto()
    CONCRETE = auto()  # structs, scalars, arrays, func/map/... definitions


@dataclass
class DeclarationSet:
    """
    Everything the parser resolved for one generation request.

    interfaces : interface name -> Interface
    type_kinds : (package_path, type_name) -> TypeKind, for every named type
                 whose declaration the parser saw
    """
    interfaces: Dict[str, Interface] = field(default_factory=dict)
    type_kinds: Dict[Tuple[str, str], TypeKind] = field(default_factory=dict)

    def add_interface(self, iface: Interface) -> None:
        self.interfaces[iface.name] = iface
        self.type_kinds[(iface.package_path, iface.name)] = TypeKind.INTERFACE

    def declare_type(self, package: str, name: str, kind: TypeKind) -> None:
        self.type_kinds[(package, name)] = kind

    def kind_of(self, package: str, name: str) -> Optional[TypeKind]:
        return self.type_kinds.get((package, name))

    def find(self, name: str) -> Interface:
        iface = self.interfaces.get(name)
        if iface is None:
            raise NotFoundError(
                f"[GEN-0010] interface '{name}' not found",
                GenLocation(interface=name),
            )
        return iface

    def names(self) -> List[str]:
        return sorted(self.interfaces.keys())

    def __contains__(self, name: str) -> bool:
        return name in self.interfaces
