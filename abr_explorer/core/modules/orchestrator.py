"""
Brute-force ABR ladder analysis.

Generates every valid (resolution, bitrate, variables) candidate, transcodes
each one through the pipeline, scores the variant once per analysis model and
aggregates the quality files per model.

Candidates run either all at once (one worker per candidate, one worker per
model inside a candidate) or strictly one after another. A candidate whose
transcode fails, or whose processing raises, contributes no results; the other
candidates are unaffected unless ``fail_fast`` is set.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ..models import (
    AnalysisOptions,
    BitrateResolutionPair,
    CandidateFailure,
    QualityAnalysisModel,
    QualityResult,
)
from .aggregator import QualityAggregator
from .candidate_namer import candidate_output_path, quality_file_path
from .pair_generator import prepare_pairs
from .pipeline import Pipeline
from .system_utils import file_exists
from .variant_expander import expand_variables
from ...utils.logging import create_progress_bar, format_bitrate, get_logger

logger = get_logger("orchestrator")


class BruteForceAnalyzer:
    """Runs quality analysis over every candidate for one reference video."""

    def __init__(self, directory: Union[str, Path], reference: Union[str, Path], pipeline: Pipeline,
                 options: Optional[AnalysisOptions] = None,
                 exists: Callable[[Path], bool] = file_exists):
        self.directory = Path(directory)
        self.reference = Path(reference)
        self.pipeline = pipeline
        self.options = options or AnalysisOptions()
        self.exists = exists
        self.models: List[QualityAnalysisModel] = list(self.options.models)
        self.failures: List[CandidateFailure] = []
        self._failures_lock = threading.Lock()

    def prepare_candidates(self) -> List[BitrateResolutionPair]:
        """Generate the filtered pairs and expand them with the pipeline variables."""
        pairs = prepare_pairs(
            self.options.resolved_resolutions(),
            self.options.resolved_bitrates(),
            self.options.filter_function,
            default_bitrates=self.options.ladder.bitrates,
        )
        return expand_variables(pairs, self.options.pipeline_variables)

    def run(self) -> Dict[QualityAnalysisModel, List[Path]]:
        """
        Analyze all candidates.

        Returns:
            Mapping from analysis model to quality files, in submission order
            (sequential) or completion order (concurrent)
        """
        self.failures = []
        candidates = self.prepare_candidates()
        if not candidates:
            logger.error(f"No pairs to analyze for {self.reference}")
            return {}

        mode = "concurrent" if self.options.concurrency else "sequential"
        logger.pairs(f"Analyzing {len(candidates)} candidates for {self.reference.name} "
                     f"with models {', '.join(str(m) for m in self.models)} ({mode})")

        aggregator = QualityAggregator()
        if self.options.concurrency:
            self._run_concurrent(candidates, aggregator)
        else:
            self._run_sequential(candidates, aggregator)

        quality_files = aggregator.as_dict()
        for model, files in quality_files.items():
            logger.result(f"{model}: {len(files)} quality files")
        logger.result(f"{len(aggregator)} quality files from "
                      f"{len(candidates) - len(self.failures)}/{len(candidates)} candidates")
        if self.failures:
            logger.warn(f"{len(self.failures)}/{len(candidates)} candidates failed for {self.reference}")
        return quality_files

    def _run_concurrent(self, candidates: List[BitrateResolutionPair], aggregator: QualityAggregator) -> None:
        with ThreadPoolExecutor(max_workers=len(candidates), thread_name_prefix="abr-candidate") as executor:
            with create_progress_bar(total=len(candidates), desc="Brute-force analysis", unit="pair",
                                     disable=not self.options.show_progress) as progress:
                future_to_candidate = {
                    executor.submit(self.analyze_pair, candidate): candidate
                    for candidate in candidates
                }
                for future in as_completed(future_to_candidate):
                    aggregator.add(future.result())
                    progress.update(1)

    def _run_sequential(self, candidates: List[BitrateResolutionPair], aggregator: QualityAggregator) -> None:
        with create_progress_bar(total=len(candidates), desc="Brute-force analysis", unit="pair",
                                 disable=not self.options.show_progress) as progress:
            for candidate in candidates:
                aggregator.add(self.analyze_pair(candidate))
                progress.update(1)

    def analyze_pair(self, candidate: BitrateResolutionPair) -> List[QualityResult]:
        """Transcode (or reuse) one candidate and score it with every model."""
        output = candidate_output_path(self.directory, candidate)

        try:
            variant = self._resolve_variant(candidate, output)
        except Exception as e:
            self._record_failure(candidate, "transcode", f"Error transcoding {self.reference} to {output.name}: {e}")
            if self.options.fail_fast:
                raise
            return []

        # Path("") normalizes to "." and is truthy
        if not variant or str(variant) in ("", "."):
            self._record_failure(candidate, "transcode", f"Error transcoding {self.reference} to {output.name}")
            return []

        variant = Path(variant)
        try:
            if self.options.concurrency and len(self.models) > 1:
                with ThreadPoolExecutor(max_workers=len(self.models), thread_name_prefix="abr-model") as executor:
                    futures = [executor.submit(self._score, variant, model) for model in self.models]
                    return [future.result() for future in futures]
            return [self._score(variant, model) for model in self.models]
        except Exception as e:
            self._record_failure(candidate, "analysis", f"Error analyzing {variant.name} against {self.reference}: {e}")
            if self.options.fail_fast:
                raise
            return []

    def _resolve_variant(self, candidate: BitrateResolutionPair, output: Path) -> Optional[Path]:
        if self.options.skip_transcode:
            logger.skip(f"Skipping transcode for {output}")
            return output
        if self.options.skip_existing and self.exists(output):
            logger.skip(f"Skipping transcode for {output} because file exists")
            return output

        logger.transcode(f"{candidate.resolution} @ {format_bitrate(candidate.bitrate)} -> {output.name}")
        return self.pipeline.transcode(
            self.reference,
            candidate.resolution,
            candidate.bitrate,
            output,
            candidate.variable_map or None,
        )

    def _score(self, variant: Path, model: QualityAnalysisModel) -> QualityResult:
        quality_file = self.pipeline.analyze_quality(
            self.reference,
            variant,
            quality_file_path(variant, model),
            model,
        )
        logger.debug(f"{model} analysis of {variant.name} -> {quality_file}")
        return QualityResult(model=model, quality_file=Path(quality_file))

    def _record_failure(self, candidate: BitrateResolutionPair, stage: str, message: str) -> None:
        logger.error(message)
        with self._failures_lock:
            self.failures.append(CandidateFailure(candidate=candidate, stage=stage, error=message))


def analyze_brute_force(directory: Union[str, Path], reference: Union[str, Path], pipeline: Pipeline,
                        options: Optional[AnalysisOptions] = None) -> Dict[QualityAnalysisModel, List[Path]]:
    """
    Run quality analysis on every candidate rendition of a reference video.

    Args:
        directory: Directory in which to put variants and quality files
        reference: Reference video file
        pipeline: Pipeline used to transcode and score
        options: Analysis options (defaults apply to anything left unset)

    Returns:
        Mapping from analysis model to quality files
    """
    return BruteForceAnalyzer(directory, reference, pipeline, options).run()
