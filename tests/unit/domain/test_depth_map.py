from __future__ import annotations

"""
Unit tests for the DepthMap visit state machine.
"""

import pytest

from wgslbundle.domain.graph_models import DepthMap, VisitState


def test_unknown_file_is_unvisited():
    depth_map = DepthMap()

    assert depth_map.state("/a") is VisitState.UNVISITED
    assert depth_map.depth("/a") is None
    assert "/a" not in depth_map


def test_enter_then_finish():
    depth_map = DepthMap()

    depth_map.enter("/a", 2)
    assert depth_map.state("/a") is VisitState.IN_PROGRESS
    assert depth_map.depth("/a") == 2

    depth_map.finish("/a")
    assert depth_map.state("/a") is VisitState.DONE
    assert len(depth_map) == 1


def test_depth_never_decreases():
    depth_map = DepthMap()
    depth_map.enter("/a", 3)
    depth_map.finish("/a")

    with pytest.raises(ValueError):
        depth_map.enter("/a", 1)

    depth_map.enter("/a", 4)
    assert depth_map.depth("/a") == 4


def test_discard_removes_entry_and_state():
    depth_map = DepthMap()
    depth_map.enter("/a", 0)
    depth_map.discard("/a")
    depth_map.discard("/never-seen")

    assert depth_map.as_dict() == {}
    assert depth_map.state("/a") is VisitState.UNVISITED


def test_items_keep_first_discovery_order():
    depth_map = DepthMap()
    for path, depth in (("/z", 1), ("/a", 1), ("/m", 2)):
        depth_map.enter(path, depth)
    depth_map.enter("/z", 5)

    assert list(depth_map.items()) == [("/z", 5), ("/a", 1), ("/m", 2)]
