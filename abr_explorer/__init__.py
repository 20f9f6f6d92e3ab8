"""
ABR Explorer - Brute-force exploration of adaptive-bitrate encoding ladders.
"""

__version__ = "1.0.0"

# Import configuration utilities
from .config import get_config, load_env_file

__all__ = [
    "get_config",
    "load_env_file",
]
