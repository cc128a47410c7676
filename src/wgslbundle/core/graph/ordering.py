from __future__ import annotations

"""
Emission ordering.

Deepest files first, so an included file's content lands before the body of
the file including it. Files sharing a depth keep their discovery order.
"""

from typing import Iterable, List, Mapping, Tuple, Union

from wgslbundle.domain.graph_models import DepthMap

DepthSource = Union[DepthMap, Mapping[str, int], Iterable[Tuple[str, int]]]


def _pairs(depths: DepthSource) -> List[Tuple[str, int]]:
    if isinstance(depths, DepthMap):
        return list(depths.items())
    if isinstance(depths, Mapping):
        return list(depths.items())
    return list(depths)


def order_with_depths(depths: DepthSource) -> List[Tuple[str, int]]:
    """Sort (identity, depth) pairs by depth, descending, keeping ties stable."""
    return sorted(_pairs(depths), key=lambda pair: pair[1], reverse=True)


def emission_order(depths: DepthSource) -> List[str]:
    """File identities in the order their content is emitted."""
    return [path for path, _ in order_with_depths(depths)]
