"""Configuration management for abr-explorer."""

import os
from pathlib import Path
from typing import Optional, Dict, Any


def load_env_file(env_path: Optional[Path] = None) -> Dict[str, str]:
    """Load environment variables from .env file."""
    if env_path is None:
        # Look for .env in current directory, then in package directory
        candidates = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for candidate in candidates:
            if candidate.exists():
                env_path = candidate
                break

    env_vars = {}

    if env_path and env_path.exists():
        with open(env_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    if '=' in line:
                        key, value = line.split('=', 1)
                        env_vars[key.strip()] = value.strip()

    return env_vars


def _as_bool(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes')


def get_config(env_path: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration from environment variables and .env file."""
    env_vars = load_env_file(env_path)

    def lookup(key: str, env_name: str, default: str) -> str:
        return env_vars.get(key, os.getenv(env_name, default))

    config = {
        'output_dir': Path(lookup('output_dir', 'OUTPUT_DIR', 'abr_output')),
        'concurrency': _as_bool(lookup('concurrency', 'CONCURRENCY', 'true')),
        'skip_existing': _as_bool(lookup('skip_existing', 'SKIP_EXISTING', 'false')),
        'encoder': lookup('encoder', 'ENCODER', 'libx264'),
        'preset': lookup('preset', 'PRESET', 'medium'),
        'vmaf_threads': int(lookup('vmaf_threads', 'VMAF_THREADS', str(min(8, os.cpu_count() or 8)))),
        'debug': _as_bool(lookup('debug', 'DEBUG', 'false')),
    }

    return config
