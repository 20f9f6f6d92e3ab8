"""
Pipeline interface consumed by the brute-force analyzer.

A pipeline transcodes the reference into a candidate variant and scores the
variant against the reference with a perceptual quality model.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional

from ..models import QualityAnalysisModel, Resolution


class Pipeline(ABC):

    @abstractmethod
    def transcode(self, reference: Path, resolution: Resolution, bitrate: int,
                  output_path: Path, variables: Optional[Mapping[str, Any]] = None) -> Optional[Path]:
        """
        Transcode ``reference`` to ``output_path``.

        Returns:
            Path of the produced variant, or None (or an empty path) on failure
        """

    @abstractmethod
    def analyze_quality(self, reference: Path, variant: Path, quality_file: Path,
                        model: QualityAnalysisModel) -> Path:
        """
        Score ``variant`` against ``reference`` with ``model``.

        Returns:
            Path of the produced quality artifact

        Raises:
            QualityAnalysisError: if the scorer fails
        """
