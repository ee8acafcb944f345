#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

# mg_errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GenLocation:
    interface: Optional[str]
    method: Optional[str] = None


class GeneratorError(RuntimeError):
    """
    Generation failed for a whole interface.
    Failures are a pure function of the input; retrying never helps.
    """

    def __init__(self, message: str, loc: GenLocation | None = None):
        super().__init__(message)
        self.message = message
        self.loc = loc

    def format(self) -> str:
        message = self.message
        if not "[GEN-" in message:
            message = f"[GEN-9999] {message}"
        if self.loc and self.loc.interface:
            if self.loc.method is not None:
                return f"{self.loc.interface}.{self.loc.method}: mockgen error: {message}"
            return f"{self.loc.interface}: mockgen error: {message}"
        return f"mockgen error: {message}"


class NotFoundError(GeneratorError):
    """The requested interface is not part of the parsed declarations."""
    pass


class UnsupportedShapeError(GeneratorError):
    """A type expression the renderer cannot turn into valid source text."""
    pass
