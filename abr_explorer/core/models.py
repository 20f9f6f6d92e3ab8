"""
Data model for ABR ladder exploration.

Holds the candidate types (resolutions, bitrate ranges, bitrate/resolution
pairs), the analysis model enum, the immutable default ladder tables and the
AnalysisOptions structure that resolves every recognised option once.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import ConfigurationError


class QualityAnalysisModel(Enum):
    """Perceptual quality scoring methods (VMAF model variants)."""
    HD = "HD"
    PHONE_HD = "PhoneHD"
    UHD = "UHD"

    def __str__(self) -> str:
        return self.value

    @property
    def vmaf_model(self) -> str:
        """libvmaf model specification used for this analysis model."""
        return _VMAF_MODELS[self]

    @classmethod
    def parse(cls, text: str) -> "QualityAnalysisModel":
        """Parse a model from its value ("PhoneHD") or member name ("PHONE_HD")."""
        key = text.strip().lower()
        for model in cls:
            if key in (model.value.lower(), model.name.lower()):
                return model
        valid = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Unknown analysis model '{text}' (expected one of: {valid})")


_VMAF_MODELS = {
    QualityAnalysisModel.HD: "version=vmaf_v0.6.1",
    QualityAnalysisModel.PHONE_HD: "version=vmaf_v0.6.1\\:enable_transform=true",
    QualityAnalysisModel.UHD: "version=vmaf_4k_v0.6.1",
}


@dataclass(frozen=True)
class BitrateRange:
    """Optional per-resolution bitrate bounds; missing bounds use the default ladder."""
    min: Optional[int] = None
    max: Optional[int] = None

    def __post_init__(self):
        for name in ("min", "max"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"BitrateRange.{name} must be >= 0, got {value}")

    def effective(self, default_bitrates: Sequence[int]) -> Tuple[int, int]:
        low = self.min if self.min is not None else min(default_bitrates)
        high = self.max if self.max is not None else max(default_bitrates)
        return low, high


@dataclass(frozen=True)
class Resolution:
    width: int
    height: int
    range: Optional[BitrateRange] = field(default=None, compare=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution dimensions must be positive, got {self.width}x{self.height}")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def pixels(self) -> int:
        return self.width * self.height

    @classmethod
    def parse(cls, text: str) -> "Resolution":
        """Parse "WxH" or "WxH:MIN-MAX" (either bound may be left empty)."""
        dims, _, bounds = text.strip().partition(":")
        try:
            width, height = (int(v) for v in dims.lower().split("x"))
        except ValueError:
            raise ConfigurationError(f"Invalid resolution '{text}' (expected WIDTHxHEIGHT)") from None

        range_ = None
        if bounds:
            low, sep, high = bounds.partition("-")
            if not sep:
                raise ConfigurationError(f"Invalid bitrate range in '{text}' (expected MIN-MAX)")
            try:
                range_ = BitrateRange(
                    min=int(low) if low else None,
                    max=int(high) if high else None,
                )
            except ValueError as e:
                raise ConfigurationError(f"Invalid bitrate range in '{text}': {e}") from None

        try:
            return cls(width, height, range_)
        except ValueError as e:
            raise ConfigurationError(str(e)) from None


@dataclass(frozen=True)
class BitrateResolutionPair:
    """
    One candidate: a resolution, a bitrate and an ordered set of option variables.

    Equality ignores the order of variable assignments; the stored order is what
    the candidate namer uses.
    """
    resolution: Resolution
    bitrate: int
    variables: Tuple[Tuple[str, Any], ...] = field(default=(), compare=False)
    _variable_key: frozenset = field(init=False, repr=False, compare=True)

    def __post_init__(self):
        if self.bitrate <= 0:
            raise ValueError(f"Bitrate must be positive, got {self.bitrate}")
        variables = self.variables
        if isinstance(variables, Mapping):
            variables = variables.items()
        object.__setattr__(self, "variables", tuple((name, value) for name, value in variables))
        object.__setattr__(self, "_variable_key", frozenset(self.variables))

    @property
    def variable_map(self) -> Dict[str, Any]:
        return dict(self.variables)

    def with_variable(self, name: str, value: Any) -> "BitrateResolutionPair":
        """Return a copy with ``name`` assigned to ``value``."""
        assignments = list(self.variables)
        for i, (existing, _) in enumerate(assignments):
            if existing == name:
                assignments[i] = (name, value)
                break
        else:
            assignments.append((name, value))
        return BitrateResolutionPair(self.resolution, self.bitrate, tuple(assignments))


@dataclass(frozen=True)
class QualityResult:
    model: QualityAnalysisModel
    quality_file: Path


@dataclass(frozen=True)
class CandidateFailure:
    """A candidate that produced no quality results."""
    candidate: BitrateResolutionPair
    stage: str  # "transcode" or "analysis"
    error: str


@dataclass(frozen=True)
class LadderDefaults:
    """Immutable default tables. Bitrate range defaults are resolved against these."""
    bitrates: Tuple[int, ...]
    resolutions: Tuple[Resolution, ...]


DEFAULT_BITRATES: Tuple[int, ...] = (
    150000, 300000, 400000, 500000, 600000, 700000, 800000, 900000,
    1000000, 1200000, 1400000, 1600000, 1800000, 2000000, 2200000, 2400000,
    2600000, 2800000, 3000000, 3400000, 3800000, 4200000, 4600000, 5000000,
    5500000, 6000000, 6500000, 7000000, 7500000, 8000000, 8500000, 9000000,
)

DEFAULT_RESOLUTIONS: Tuple[Resolution, ...] = (
    Resolution(640, 360),
    Resolution(768, 432),
    Resolution(960, 540),
    Resolution(1280, 720),
    Resolution(1920, 1080),
)

DEFAULT_LADDER = LadderDefaults(bitrates=DEFAULT_BITRATES, resolutions=DEFAULT_RESOLUTIONS)

DEFAULT_MODELS: Tuple[QualityAnalysisModel, ...] = (QualityAnalysisModel.HD,)


def default_filter(bitrate: int, resolution: Resolution) -> bool:
    """Accept bitrates between 0.3 and 8 bits per pixel of the resolution."""
    return resolution.pixels * 0.3 <= bitrate <= resolution.pixels * 8


FilterFunction = Callable[[int, Resolution], bool]


@dataclass
class AnalysisOptions:
    """Every option recognised by the brute-force analyzer, with its default."""
    models: Sequence[QualityAnalysisModel] = DEFAULT_MODELS
    bitrates: Optional[Sequence[int]] = None
    resolutions: Optional[Sequence[Resolution]] = None
    filter_function: FilterFunction = default_filter
    concurrency: bool = True
    pipeline_variables: Optional[Mapping[str, Sequence[Any]]] = None
    skip_transcode: bool = False
    skip_existing: bool = False
    fail_fast: bool = False
    ladder: LadderDefaults = DEFAULT_LADDER
    show_progress: bool = True

    def resolved_bitrates(self) -> List[int]:
        return list(self.bitrates if self.bitrates is not None else self.ladder.bitrates)

    def resolved_resolutions(self) -> List[Resolution]:
        return list(self.resolutions if self.resolutions is not None else self.ladder.resolutions)
