"""
System utilities for abr_explorer.

This module provides system-level utilities including:
- File existence checks used by the skip-existing policy
- Subprocess execution with consistent logging and error handling
- Output directory preparation
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Optional

from ...utils.logging import get_logger

logger = get_logger("system_utils")


def file_exists(path: "str | os.PathLike[str] | Path") -> bool:
    """Thin existence wrapper to provide a stable patch point for tests.

    Semantics: identical to Path(path).exists(), returning False on OSError
    (e.g. permission errors on a parent directory).
    """
    try:
        return Path(path).exists()
    except OSError:
        return False


def ensure_parent_dir(path: Path) -> Path:
    """Create the parent directory of ``path`` if needed and return ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def format_command(cmd: list[str]) -> str:
    return " ".join(shlex.quote(c) for c in cmd)


def run_command(cmd: list[str], timeout: Optional[int] = 30, capture_output: bool = True,
                text: bool = True, check: bool = False) -> subprocess.CompletedProcess:
    """
    Standardized subprocess command runner with consistent error handling.

    Args:
        cmd: Command as list of strings
        timeout: Timeout in seconds (default: 30, None waits forever)
        capture_output: Whether to capture stdout/stderr (default: True)
        text: Whether to use text mode (default: True)
        check: Whether to raise exception on non-zero exit (default: False)

    Returns:
        CompletedProcess object
    """
    logger.cmd(format_command(cmd))
    try:
        return subprocess.run(
            cmd,
            capture_output=capture_output,
            text=text,
            timeout=timeout,
            check=check
        )
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {' '.join(cmd[:3])}...")
        raise
    except subprocess.CalledProcessError as e:
        logger.debug(f"Command failed: {' '.join(cmd[:3])}... (exit code: {e.returncode})")
        raise
