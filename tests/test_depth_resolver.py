import pytest
from tasktree.utils__depth_resolver import drag_offset, resolve_depth


def test_depth_from_offset():
    """Test each 50px step adds one level"""
    assert resolve_depth(0, 0) == 0
    assert resolve_depth(49, 0) == 0
    assert resolve_depth(50, 0) == 1
    assert resolve_depth(149.9, 0) == 2


def test_depth_is_distance_from_container():
    """Test that the depth uses the absolute distance to the left edge"""
    assert resolve_depth(0, 100) == 2
    assert resolve_depth(320, 200) == 2


def test_custom_pixels_per_level():
    """Test a different level width"""
    assert resolve_depth(100, 0, pixels_per_level=25) == 4


def test_depth_is_unbounded():
    """Test there is no maximum nesting"""
    assert resolve_depth(5000, 0) == 100


def test_invalid_pixels_per_level():
    """Test that a zero level width is rejected"""
    with pytest.raises(ValueError):
        resolve_depth(10, 0, pixels_per_level=0)


def test_drag_offset():
    """Test the offset captured at drag start"""
    assert drag_offset(130, 30) == 100
