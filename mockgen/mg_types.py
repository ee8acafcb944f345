#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, Tuple, Union

from mg_errors import UnsupportedShapeError

# ===========================================================
# Type expressions as they occur in Go method signatures.
# ===========================================================

GO_PREDECLARED_TYPES = (
    "bool", "byte", "complex64", "complex128", "error", "float32", "float64",
    "int", "int8", "int16", "int32", "int64", "rune", "string",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr", "any",
)

# Maps a package path to the identifier used to spell it; "" means unqualified.
Qualifier = Callable[[str], str]


class TypeExpr:
    """
    Base class for all type expressions.
    Used only as a common marker; concrete variants are dataclasses below.
    """
    pass


@dataclass(frozen=True)
class Named(TypeExpr):
    name: str  # "string", "Err", "struct{}", etc.


@dataclass(frozen=True)
class Qualified(TypeExpr):
    package: str  # import path, "" for same-context references
    name: str


@dataclass(frozen=True)
class Pointer(TypeExpr):
    inner: TypeExpr


@dataclass(frozen=True)
class Slice(TypeExpr):
    inner: TypeExpr


@dataclass(frozen=True)
class Array(TypeExpr):
    length: Union[int, str]  # literal or constant expression, kept verbatim
    inner: TypeExpr


@dataclass(frozen=True)
class Map(TypeExpr):
    key: TypeExpr
    value: TypeExpr


class ChanDir(Enum):
    BOTH = "both"
    SEND = "send"
    RECV = "recv"


@dataclass(frozen=True)
class Channel(TypeExpr):
    direction: ChanDir
    inner: TypeExpr


@dataclass(frozen=True)
class Function(TypeExpr):
    params: Tuple[TypeExpr, ...] = ()
    results: Tuple[TypeExpr, ...] = ()


@dataclass(frozen=True)
class Variadic(TypeExpr):
    inner: TypeExpr


@dataclass(frozen=True)
class AnyInterface(TypeExpr):
    pass


# --- helpers ---

_ERROR_TYPE = Named("error")


def get_error_type() -> Named:
    return _ERROR_TYPE


def is_error_type(t: TypeExpr) -> bool:
    """The predeclared `error`, spelled bare or as an unqualified reference."""
    if isinstance(t, Qualified) and not t.package:
        t = Named(t.name)
    return t == get_error_type()


def natural_package_name(package: str) -> str:
    """
    Guess the identifier a package is referred to by from its import path.

    `net/http` -> `http`, `gopkg.in/yaml.v2` -> `yaml`,
    `github.com/org/lib/v3` -> `lib`, `example.com/go-kit` -> `go_kit`.
    """
    segments = [s for s in package.split("/") if s]
    if not segments:
        return ""
    last = segments[-1]
    if len(segments) > 1 and last[:1] == "v" and last[1:].isdigit():
        last = segments[-2]
    head, dot, tail = last.rpartition(".")
    if dot and tail[:1] == "v" and tail[1:].isdigit():
        last = head
    return sanitize_identifier(last)


def sanitize_identifier(text: str) -> str:
    out = "".join(c if (c.isalnum() or c == "_") else "_" for c in text)
    if out[:1].isdigit():
        out = f"_{out}"
    return out


def type_children(t: TypeExpr) -> Tuple[TypeExpr, ...]:
    if isinstance(t, (Pointer, Slice, Array, Channel, Variadic)):
        return (t.inner,)
    if isinstance(t, Map):
        return (t.key, t.value)
    if isinstance(t, Function):
        return tuple(t.params) + tuple(t.results)
    return ()


def walk_type(t: TypeExpr) -> Iterator[TypeExpr]:
    """Depth-first, pre-order iteration over a type expression tree."""
    yield t
    for child in type_children(t):
        yield from walk_type(child)


# --- rendering ---

def format_type(t: TypeExpr, qualify: Optional[Qualifier] = None) -> str:
    """
    Render a type expression as Go source text.

    Args:
        t:       The type expression to render.
        qualify: Maps a package path to its local identifier. When omitted the
                 natural package name is used.
    """
    if isinstance(t, Named):
        return t.name
    elif isinstance(t, Qualified):
        if not t.package:
            return t.name
        ident = qualify(t.package) if qualify is not None else natural_package_name(t.package)
        return f"{ident}.{t.name}" if ident else t.name
    elif isinstance(t, Pointer):
        return f"*{format_type(t.inner, qualify)}"
    elif isinstance(t, Slice):
        return f"[]{format_type(t.inner, qualify)}"
    elif isinstance(t, Array):
        return f"[{t.length}]{format_type(t.inner, qualify)}"
    elif isinstance(t, Map):
        return f"map[{format_type(t.key, qualify)}]{format_type(t.value, qualify)}"
    elif isinstance(t, Channel):
        inner = format_type(t.inner, qualify)
        if t.direction is ChanDir.SEND:
            return f"chan<- {inner}"
        if t.direction is ChanDir.RECV:
            return f"<-chan {inner}"
        # `chan <-chan T` would parse as `chan<- (chan T)`
        if isinstance(t.inner, Channel) and t.inner.direction is ChanDir.RECV:
            return f"chan ({inner})"
        return f"chan {inner}"
    elif isinstance(t, Function):
        return "func" + format_signature_tail(t.params, t.results, qualify)
    elif isinstance(t, Variadic):
        return f"...{format_type(t.inner, qualify)}"
    elif isinstance(t, AnyInterface):
        return "interface{}"
    raise UnsupportedShapeError(f"[GEN-0021] not a type expression: {t!r}")


def format_results(results: Tuple[TypeExpr, ...], qualify: Optional[Qualifier] = None) -> str:
    """Result list as it follows a parameter list: '', ' T' or ' (T, U)'."""
    if not results:
        return ""
    if len(results) == 1:
        return " " + format_type(results[0], qualify)
    return " (" + ", ".join(format_type(r, qualify) for r in results) + ")"


def format_signature_tail(
        params: Tuple[TypeExpr, ...],
        results: Tuple[TypeExpr, ...],
        qualify: Optional[Qualifier] = None,
) -> str:
    params_str = ", ".join(format_type(p, qualify) for p in params)
    return f"({params_str}){format_results(results, qualify)}"
