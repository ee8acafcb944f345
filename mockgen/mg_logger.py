"""
Logging utilities for the mock generator.

This module provides logging functions that respect the GenerationContext
log level and format flags.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time
from typing import Optional

from mg_context import GenerationContext, LogLevel


def log(context: GenerationContext, log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's logging level admits it.

    Args:
        context:    The generation context containing the logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        print("No context provided for logging.", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        return
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    if context.log_level >= log_level:
        print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: GenerationContext, message: str) -> None:
    """
    Log an error-level message if logging level is ERROR or higher.
    """
    log(context, LogLevel.ERROR, message)


def log_warning(context: GenerationContext, message: str) -> None:
    """
    Log a warning-level message if logging level is WARNING or higher.
    """
    log(context, LogLevel.WARNING, message)


def log_info(context: GenerationContext, message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: GenerationContext, message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: GenerationContext, stage: str, interface: Optional[str] = None) -> None:
    """
    Log the start of a generation stage.

    Args:
        context:   The generation context containing logging flags.
        stage:     The name of the stage (e.g., "Planning imports").
        interface: Optional interface name being processed.
    """
    if interface:
        log(context, LogLevel.INFO, f"{stage} interface '{interface}'")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
