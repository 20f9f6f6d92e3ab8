"""CLI entry point for the abr-explorer package."""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import get_config
from .core.errors import AbrExplorerError, ConfigurationError
from .core.models import AnalysisOptions, QualityAnalysisModel, Resolution
from .core.modules.candidate_namer import candidate_output_path
from .core.modules.ffmpeg_pipeline import FfmpegPipeline
from .core.modules.orchestrator import BruteForceAnalyzer
from .utils.logging import (
    format_bitrate,
    get_logger,
    print_section_header,
    print_separator,
    set_debug_mode,
    set_quiet_mode,
)

logger = get_logger("cli")

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG = 2


def _split(text: str) -> List[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_models(text: str) -> List[QualityAnalysisModel]:
    return [QualityAnalysisModel.parse(item) for item in _split(text)]


def parse_bitrates(text: str) -> List[int]:
    bitrates = []
    for item in _split(text):
        try:
            value = int(item)
        except ValueError:
            raise ConfigurationError(f"Invalid bitrate '{item}'") from None
        if value <= 0:
            raise ConfigurationError(f"Bitrate must be positive, got {value}")
        bitrates.append(value)
    return bitrates


def parse_resolutions(text: str) -> List[Resolution]:
    return [Resolution.parse(item) for item in _split(text)]


def parse_variables(assignments: List[str]) -> Optional[Dict[str, List[str]]]:
    """Parse repeated ``NAME=V1,V2`` arguments into an ordered variable grid."""
    if not assignments:
        return None
    grid: Dict[str, List[str]] = {}
    for assignment in assignments:
        name, sep, values = assignment.partition("=")
        if not sep or not name.strip() or not _split(values):
            raise ConfigurationError(f"Invalid variable '{assignment}' (expected NAME=V1,V2)")
        grid.setdefault(name.strip(), []).extend(_split(values))
    return grid


def build_parser(config: Dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abr-explorer",
        description="ABR Explorer - Transcode and VMAF-score every resolution/bitrate candidate of a video",
    )
    parser.add_argument("reference", help="Reference video file")
    parser.add_argument("-o", "--output", default=str(config['output_dir']),
                        help="Directory for variants and quality files (default: %(default)s)")
    parser.add_argument("--models", default=str(QualityAnalysisModel.HD),
                        help="Comma-separated analysis models: HD, PhoneHD, UHD (default: %(default)s)")
    parser.add_argument("--bitrates", help="Comma-separated bitrates in bps (default: 150k-9M ladder)")
    parser.add_argument("--resolutions",
                        help="Comma-separated WxH[:MIN-MAX] resolutions (default: 360p-1080p)")
    parser.add_argument("--var", action="append", default=[], metavar="NAME=V1,V2",
                        help="Extra ffmpeg option to vary, e.g. --var preset=fast,slow (repeatable)")
    parser.add_argument("--sequential", action="store_true", default=not config['concurrency'],
                        help="Process candidates one at a time")
    parser.add_argument("--skip-transcode", action="store_true",
                        help="Assume all variants already exist and only run quality analysis")
    parser.add_argument("--skip-existing", action="store_true", default=config['skip_existing'],
                        help="Reuse variants that already exist on disk")
    parser.add_argument("--fail-fast", action="store_true",
                        help="Abort the run on the first analysis error")
    parser.add_argument("--encoder", default=config['encoder'], help="ffmpeg video encoder (default: %(default)s)")
    parser.add_argument("--preset", default=config['preset'], help="Encoder preset (default: %(default)s)")
    parser.add_argument("--vmaf-threads", type=int, default=config['vmaf_threads'],
                        help="libvmaf threads, 0 for auto (default: %(default)s)")
    parser.add_argument("--dry-run", action="store_true",
                        help="List candidates and their output names without transcoding")
    parser.add_argument("--debug", action="store_true", default=config['debug'], help="Enable debug output")
    parser.add_argument("--quiet", action="store_true", help="Only show warnings, errors and results")
    return parser


def build_options(args: argparse.Namespace) -> AnalysisOptions:
    return AnalysisOptions(
        models=parse_models(args.models),
        bitrates=parse_bitrates(args.bitrates) if args.bitrates else None,
        resolutions=parse_resolutions(args.resolutions) if args.resolutions else None,
        concurrency=not args.sequential,
        pipeline_variables=parse_variables(args.var),
        skip_transcode=args.skip_transcode,
        skip_existing=args.skip_existing,
        fail_fast=args.fail_fast,
        show_progress=not args.quiet,
    )


def print_candidates(analyzer: BruteForceAnalyzer) -> int:
    candidates = analyzer.prepare_candidates()
    print_section_header(f"{len(candidates)} CANDIDATES FOR {analyzer.reference.name}")
    for candidate in candidates:
        print(f"{str(candidate.resolution):<10} {format_bitrate(candidate.bitrate):>9}  "
              f"{candidate_output_path(analyzer.directory, candidate)}")
    return EXIT_OK if candidates else EXIT_FAILURES


def print_results(quality_files: Dict[QualityAnalysisModel, List[Path]]) -> None:
    print_section_header("QUALITY FILES")
    for model, files in quality_files.items():
        print(f"{model} ({len(files)})")
        print_separator()
        for path in files:
            print(f"  {path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the abr-explorer command."""
    try:
        config = get_config()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    args = build_parser(config).parse_args(argv)
    set_debug_mode(args.debug)
    set_quiet_mode(args.quiet)

    try:
        options = build_options(args)
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CONFIG

    pipeline = FfmpegPipeline(encoder=args.encoder, preset=args.preset, vmaf_threads=args.vmaf_threads)
    analyzer = BruteForceAnalyzer(args.output, args.reference, pipeline, options)

    if args.dry_run:
        return print_candidates(analyzer)

    try:
        quality_files = analyzer.run()
    except AbrExplorerError as e:
        logger.error(f"Analysis aborted: {e}")
        return EXIT_FAILURES
    if not quality_files and not analyzer.failures:
        return EXIT_FAILURES
    print_results(quality_files)
    return EXIT_FAILURES if analyzer.failures else EXIT_OK


def main_explorer():
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    main_explorer()
