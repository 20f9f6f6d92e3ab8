"""Cross-multiplies candidates with named option-variable grids."""

from typing import Any, List, Mapping, Optional, Sequence

from ..models import BitrateResolutionPair


def expand_variables(pairs: Sequence[BitrateResolutionPair],
                     variables: Optional[Mapping[str, Sequence[Any]]] = None) -> List[BitrateResolutionPair]:
    """
    Expand every pair once per value of every variable.

    Variables are applied in insertion order, so for ``{"preset": ["fast", "slow"]}``
    pair P becomes ``[P+{preset: fast}, P+{preset: slow}]``. Without variables the
    pairs are returned unchanged.
    """
    expanded = list(pairs)
    if not variables:
        return expanded

    for name, values in variables.items():
        next_round: List[BitrateResolutionPair] = []
        for pair in expanded:
            for value in values:
                next_round.append(pair.with_variable(name, value))
        expanded = next_round

    return expanded
