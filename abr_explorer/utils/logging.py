"""
Centralized logging utilities for abr_explorer

Provides consistent logging patterns with configurable debug levels:
- [INFO] for general information
- [WARN] for warnings
- [ERROR] for errors
- [RESULT] for final results
- [DEBUG] for debug information
- [PAIRS] for candidate generation messages
- [SKIP] for skipped transcodes
- [TRANSCODE] for transcode messages
- [VMAF] for quality scoring messages

Usage:
    from abr_explorer.utils.logging import get_logger, set_debug_mode

    set_debug_mode(True)  # Enable debug messages

    logger = get_logger("orchestrator")
    logger.info("This is an info message")
    logger.debug("This is a debug message")  # Only shows if debug enabled
    logger.transcode("Transcoding 1280x720 @ 2000000")
"""

import os
from enum import Enum
from typing import Optional

from tqdm import tqdm

# Global logging configuration
_DEBUG_ENABLED = False
_QUIET_MODE = False
_LOG_LEVEL = "INFO"


class LogLevel(Enum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


def _init_debug_mode():
    global _DEBUG_ENABLED
    if os.getenv('DEBUG', '').lower() in ('1', 'true', 'yes'):
        _DEBUG_ENABLED = True


_init_debug_mode()


def set_debug_mode(enabled: bool):
    """Enable or disable debug mode globally"""
    global _DEBUG_ENABLED
    _DEBUG_ENABLED = enabled


def set_quiet_mode(enabled: bool):
    """Enable or disable quiet mode (suppress INFO and DEBUG messages)"""
    global _QUIET_MODE
    _QUIET_MODE = enabled


def set_log_level(level: str):
    """Set the global log level: DEBUG, INFO, WARN, ERROR"""
    global _LOG_LEVEL
    _LOG_LEVEL = level.upper()


class Logger:
    """Centralized logger with consistent formatting and configurable output"""

    def __init__(self, module_name: str = ""):
        self.module_name = module_name
        self.prefix = f"[{module_name}] " if module_name else ""

    def _should_log(self, level: LogLevel) -> bool:
        """Check if message should be logged based on current settings"""
        if _QUIET_MODE and level in (LogLevel.DEBUG, LogLevel.INFO):
            return False

        current_level = LogLevel.__members__.get(_LOG_LEVEL, LogLevel.INFO)
        return level.value >= current_level.value

    def _log(self, level: LogLevel, tag: str, message: str):
        if not self._should_log(level):
            return
        # tqdm.write keeps messages from tearing an active progress bar
        tqdm.write(f"[{tag}] {self.prefix}{message}")

    def debug(self, message: str):
        """Log debug message (only if debug mode enabled)"""
        if _DEBUG_ENABLED:
            self._log(LogLevel.DEBUG, "DEBUG", message)

    def info(self, message: str):
        """Log informational message"""
        self._log(LogLevel.INFO, "INFO", message)

    def warn(self, message: str):
        """Log warning message"""
        self._log(LogLevel.WARN, "WARN", message)

    def error(self, message: str):
        """Log error message"""
        self._log(LogLevel.ERROR, "ERROR", message)

    def result(self, message: str):
        """Log result message"""
        self._log(LogLevel.INFO, "RESULT", message)

    # Domain-specific logging methods
    def pairs(self, message: str):
        """Log candidate generation message"""
        self._log(LogLevel.INFO, "PAIRS", message)

    def skip(self, message: str):
        """Log skipped transcode"""
        self._log(LogLevel.INFO, "SKIP", message)

    def transcode(self, message: str):
        """Log transcode message"""
        self._log(LogLevel.INFO, "TRANSCODE", message)

    def vmaf(self, message: str):
        """Log VMAF calculation message"""
        self._log(LogLevel.INFO, "VMAF", message)

    def cmd(self, message: str):
        """Log command execution message"""
        if _DEBUG_ENABLED:
            self._log(LogLevel.DEBUG, "CMD", message)


def get_logger(module_name: str = "") -> Logger:
    """Get a logger instance for a module"""
    return Logger(module_name)


def create_progress_bar(total: Optional[int] = None, desc: str = "", unit: str = "it",
                        position: Optional[int] = None, leave: bool = True,
                        disable: bool = False):
    """Create a progress bar with consistent styling"""
    return tqdm(total=total, desc=desc, unit=unit, position=position, leave=leave,
                disable=disable or _QUIET_MODE)


def print_section_header(title: str, width: int = 90):
    """Print a section header with consistent formatting"""
    print("=" * width)
    print(title)
    print("=" * width)


def print_separator(width: int = 90):
    """Print a separator line"""
    print("-" * width)


def format_bitrate(bits_per_second: int) -> str:
    """Format a bitrate in bits per second to a human-readable string"""
    if bits_per_second >= 1_000_000:
        return f"{bits_per_second / 1_000_000:.1f}Mbps"
    if bits_per_second >= 1_000:
        return f"{bits_per_second / 1_000:.0f}kbps"
    return f"{bits_per_second}bps"
