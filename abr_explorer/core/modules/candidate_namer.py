"""Deterministic output names for candidates and their quality artifacts."""

from pathlib import Path
from typing import Union

from ..models import BitrateResolutionPair, QualityAnalysisModel

VARIANT_SUFFIX = ".mp4"
QUALITY_SUFFIX = "_vmaf.json"


def candidate_output_path(directory: Union[str, Path], candidate: BitrateResolutionPair,
                          suffix: str = VARIANT_SUFFIX) -> Path:
    """Return ``{directory}/{w}x{h}_{bitrate}[_{name}_{value}...]{suffix}``."""
    name = f"{candidate.resolution.width}x{candidate.resolution.height}_{candidate.bitrate}"
    for variable, value in candidate.variables:
        name += f"_{variable}_{value}"
    return Path(directory) / f"{name}{suffix}"


def quality_file_path(variant: Union[str, Path], model: QualityAnalysisModel) -> Path:
    """Return ``{variant dir}/{model}/{variant stem}_vmaf.json``."""
    variant = Path(variant)
    return variant.parent / str(model) / f"{variant.stem}{QUALITY_SUFFIX}"
