"""Core candidate generation and analysis orchestration.

Re-exports the main entry points so callers can import them from
abr_explorer.core directly.
"""

from .models import (
    AnalysisOptions,
    BitrateRange,
    BitrateResolutionPair,
    QualityAnalysisModel,
    Resolution,
)
from .modules.orchestrator import BruteForceAnalyzer, analyze_brute_force
from .modules.pair_generator import prepare_pairs
from .modules.variant_expander import expand_variables

__all__ = [
    "AnalysisOptions",
    "BitrateRange",
    "BitrateResolutionPair",
    "QualityAnalysisModel",
    "Resolution",
    "BruteForceAnalyzer",
    "analyze_brute_force",
    "prepare_pairs",
    "expand_variables",
]
