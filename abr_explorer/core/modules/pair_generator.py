"""
Bitrate/resolution pair generation.

Builds the candidate set from the configured resolutions and bitrates, keeping
a pair only when the filter function accepts it and, for resolutions carrying a
bitrate range, when the bitrate falls within that range. Range bounds that are
left unset are resolved against the default ladder, not the caller's bitrates.
"""

from typing import Iterable, List, Optional, Sequence

from ..models import (
    DEFAULT_BITRATES,
    BitrateRange,
    BitrateResolutionPair,
    FilterFunction,
    Resolution,
    default_filter,
)
from ...utils.logging import get_logger

logger = get_logger("pair_generator")


def bitrate_in_range(bitrate: int, bitrate_range: BitrateRange,
                     default_bitrates: Sequence[int] = DEFAULT_BITRATES) -> bool:
    """Check a bitrate against a range, filling missing bounds from the default ladder."""
    low, high = bitrate_range.effective(default_bitrates)
    return low <= bitrate <= high


def prepare_pairs(resolutions: Iterable[Resolution], bitrates: Sequence[int],
                  filter_function: Optional[FilterFunction] = None,
                  default_bitrates: Sequence[int] = DEFAULT_BITRATES) -> List[BitrateResolutionPair]:
    """
    Prepare the resolution-bitrate pairs to be analyzed.

    Args:
        resolutions: Resolutions to analyze, optionally carrying a bitrate range
        bitrates: Candidate bitrates in bits per second
        filter_function: Predicate over (bitrate, resolution); defaults to 0.3-8 bits per pixel
        default_bitrates: Ladder used to fill missing range bounds

    Returns:
        Pairs ordered by resolution, then bitrate, in input order
    """
    accept = filter_function or default_filter
    pairs: List[BitrateResolutionPair] = []
    seen = set()

    for resolution in resolutions:
        for bitrate in bitrates:
            key = (resolution.width, resolution.height, bitrate)
            if key in seen:
                continue
            if not accept(bitrate, resolution):
                continue
            if resolution.range is not None and not bitrate_in_range(bitrate, resolution.range, default_bitrates):
                continue
            seen.add(key)
            pairs.append(BitrateResolutionPair(resolution, bitrate))

    logger.debug(f"Prepared {len(pairs)} bitrate/resolution pairs")
    return pairs
