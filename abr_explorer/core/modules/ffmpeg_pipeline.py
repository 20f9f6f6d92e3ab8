"""
Local FFmpeg pipeline for abr_explorer.

Implements the Pipeline interface with the ffmpeg/ffprobe command line tools:
- Bitrate-constrained transcoding of the reference to each candidate rendition
- VMAF scoring with libvmaf, writing the per-frame JSON log as the quality file
"""

import subprocess
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from ..errors import QualityAnalysisError
from ..models import QualityAnalysisModel, Resolution
from .pipeline import Pipeline
from .system_utils import ensure_parent_dir, file_exists, run_command
from ...utils.logging import get_logger

logger = get_logger("ffmpeg_pipeline")


def build_transcode_cmd(reference: Path, resolution: Resolution, bitrate: int, output_path: Path,
                        encoder: str = "libx264", preset: str = "medium",
                        variables: Optional[Mapping[str, Any]] = None) -> List[str]:
    """
    Build the ffmpeg command producing one candidate rendition.

    Pipeline variables become extra output options: {"tune": "film"} adds
    ``-tune film``. A variable named like an existing option overrides it.
    """
    maxrate = int(bitrate * 1.5)
    bufsize = int(bitrate * 2.0)

    options = {
        "c:v": encoder,
        "preset": preset,
        "b:v": str(bitrate),
        "maxrate": str(maxrate),
        "bufsize": str(bufsize),
    }
    for name, value in (variables or {}).items():
        options[name.lstrip("-")] = str(value)

    cmd = [
        "ffmpeg", "-hide_banner", "-loglevel", "error", "-y",
        "-i", str(reference),
        "-vf", f"scale={resolution.width}:{resolution.height}",
    ]
    for name, value in options.items():
        cmd.extend([f"-{name}", value])
    cmd.extend(["-an", str(output_path)])
    return cmd


def build_vmaf_cmd(reference: Path, variant: Path, quality_file: Path, model: QualityAnalysisModel,
                   reference_size: Tuple[int, int], n_threads: int = 0) -> List[str]:
    """
    Build the ffmpeg/libvmaf command scoring ``variant`` against ``reference``.

    The variant is upscaled to the reference resolution before comparison.
    """
    width, height = reference_size
    opts = [f"model='{model.vmaf_model}'", "log_fmt=json", f"log_path={quality_file}"]
    if n_threads and n_threads > 0:
        opts.append(f"n_threads={n_threads}")

    filter_graph = (
        f"[0:v]scale={width}:{height}:flags=bicubic,setpts=PTS-STARTPTS[dist];"
        f"[1:v]setpts=PTS-STARTPTS[ref];"
        f"[dist][ref]libvmaf={':'.join(opts)}"
    )
    return [
        "ffmpeg", "-hide_banner", "-loglevel", "error", "-y",
        "-i", str(variant),    # distorted first
        "-i", str(reference),  # reference second
        "-lavfi", filter_graph,
        "-f", "null", "-",
    ]


def probe_dimensions(file: Path, timeout: int = 30) -> Optional[Tuple[int, int]]:
    """Return (width, height) of the first video stream, or None if ffprobe fails."""
    cmd = [
        "ffprobe", "-v", "error", "-select_streams", "v:0",
        "-show_entries", "stream=width,height",
        "-of", "csv=s=x:p=0", str(file),
    ]
    result = run_command(cmd, timeout=timeout)
    if result.returncode != 0 or not result.stdout.strip():
        return None
    try:
        width, height = (int(v) for v in result.stdout.strip().split("x")[:2])
    except ValueError:
        return None
    return width, height


class FfmpegPipeline(Pipeline):
    """Transcodes and scores candidates with local ffmpeg/libvmaf."""

    def __init__(self, encoder: str = "libx264", preset: str = "medium",
                 vmaf_threads: int = 0, timeout: Optional[int] = 3600):
        self.encoder = encoder
        self.preset = preset
        self.vmaf_threads = vmaf_threads
        self.timeout = timeout

    def transcode(self, reference: Path, resolution: Resolution, bitrate: int,
                  output_path: Path, variables: Optional[Mapping[str, Any]] = None) -> Optional[Path]:
        output_path = ensure_parent_dir(Path(output_path))
        cmd = build_transcode_cmd(reference, resolution, bitrate, output_path,
                                  self.encoder, self.preset, variables)
        try:
            result = run_command(cmd, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            return None
        except OSError as e:
            logger.error(f"Could not start ffmpeg for {output_path.name}: {e}")
            return None

        if result.returncode != 0:
            logger.error(f"ffmpeg exited with {result.returncode} for {output_path.name}: "
                         f"{(result.stderr or '').strip()[:200]}")
            return None
        if not file_exists(output_path):
            logger.error(f"Encoding produced no output file: {output_path}")
            return None
        return output_path

    def analyze_quality(self, reference: Path, variant: Path, quality_file: Path,
                        model: QualityAnalysisModel) -> Path:
        quality_file = ensure_parent_dir(Path(quality_file))
        try:
            reference_size = probe_dimensions(Path(reference))
        except (subprocess.TimeoutExpired, OSError) as e:
            raise QualityAnalysisError(f"Could not probe dimensions of {reference}: {e}", quality_file) from e
        if reference_size is None:
            raise QualityAnalysisError(f"Could not probe dimensions of {reference}", quality_file)

        cmd = build_vmaf_cmd(Path(reference), Path(variant), quality_file, model,
                             reference_size, self.vmaf_threads)
        logger.vmaf(f"{model} scoring {Path(variant).name}")
        try:
            result = run_command(cmd, timeout=self.timeout)
        except (subprocess.TimeoutExpired, OSError) as e:
            raise QualityAnalysisError(f"libvmaf did not run for {Path(variant).name}: {e}", quality_file) from e
        if result.returncode != 0:
            raise QualityAnalysisError(
                f"libvmaf exited with {result.returncode} for {Path(variant).name}",
                quality_file, result.stderr or "",
            )
        if not file_exists(quality_file):
            raise QualityAnalysisError(f"libvmaf produced no log at {quality_file}", quality_file)
        return quality_file
