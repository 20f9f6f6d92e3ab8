"""
Test package for abr_explorer.

Unit tests live in tests/unit, end-to-end CLI tests in tests/integration and
tests pinning previously wrong behavior in tests/regression. No test invokes
ffmpeg; pipelines and subprocess calls are mocked.
"""

__version__ = "1.0.0"
