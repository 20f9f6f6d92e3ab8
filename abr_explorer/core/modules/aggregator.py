"""
Aggregation of quality results.

Collects QualityResult objects into a mapping from analysis model to the list
of quality files, in the order they were added.
"""

import threading
from pathlib import Path
from typing import Dict, Iterable, List

from ..models import QualityAnalysisModel, QualityResult


class QualityAggregator:
    """Thread-safe model -> quality files mapping."""

    def __init__(self):
        self._lock = threading.Lock()
        self._files: Dict[QualityAnalysisModel, List[Path]] = {}

    def add(self, results: Iterable[QualityResult]) -> None:
        """Append each result's quality file under its model."""
        results = list(results)
        with self._lock:
            for result in results:
                self._files.setdefault(result.model, []).append(result.quality_file)

    def as_dict(self) -> Dict[QualityAnalysisModel, List[Path]]:
        with self._lock:
            return {model: list(files) for model, files in self._files.items()}

    def __len__(self) -> int:
        with self._lock:
            return sum(len(files) for files in self._files.values())
