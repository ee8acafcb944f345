"""
Generation context for cross-cutting generator options.

This module defines the GenerationContext dataclass which holds options that
affect several stages of mock generation (naming, prologue, logging).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Optional


class LogLevel(IntEnum):
    """Hierarchical logging levels for the mock generator."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages
    DEBUG = 30      # Detailed diagnostic information


DEFAULT_RECORDER_IMPORT = "github.com/stretchr/testify/mock"


@dataclass
class GenerationContext:
    """
    Holds cross-cutting options that affect multiple generation stages.

    Attributes:
        recorder_import:    Import path of the call-recording runtime package.
        recorder_name:      Identifier the recorder package is referenced by
                            (`<recorder_name>.Mock` is embedded in every mock).
        mock_prefix:        Prefix used when exporting the name of a mock for an
                            unexported interface (`requester` -> `mockRequester`).
        in_package:         If True, the mock lives in the interface's own package:
                            self-package references are unqualified and the
                            self import is omitted from the prologue.
        source_root:        Root the self import path is computed relative to.
        log_rich_format:    If True, emit logs in rich format (timestamp, level).
        log_level:          Current logging level.
    """
    recorder_import: str = DEFAULT_RECORDER_IMPORT
    recorder_name: str = "mock"
    mock_prefix: str = "mock"
    in_package: bool = False
    source_root: Optional[Path] = None
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING

    @staticmethod
    def default() -> 'GenerationContext':
        """Create a GenerationContext with default settings."""
        return GenerationContext(log_level=LogLevel.WARNING)

    @staticmethod
    def from_env() -> 'GenerationContext':
        """Create a GenerationContext whose source root is `$GOPATH/src`, if GOPATH is set."""
        context = GenerationContext.default()
        go_path = os.getenv("GOPATH")
        if go_path:
            # Only the first entry of a list-valued GOPATH is used
            first = go_path.split(os.pathsep)[0]
            context.source_root = Path(first) / "src"
        return context
