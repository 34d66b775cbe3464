import math

DEFAULT_PIXELS_PER_LEVEL = 50


def drag_offset(start_x: float, container_left: float) -> float:
    """Distance from the container's left edge to where the row was grabbed"""
    return start_x - container_left


def resolve_depth(
    pointer_x: float,
    container_left: float,
    pixels_per_level: int = DEFAULT_PIXELS_PER_LEVEL,
) -> int:
    """
    Convert a horizontal pointer position into a nesting depth.

    Args:
        pointer_x: Pointer x, already shifted back by the drag-start offset
        container_left: x of the list container's left edge
        pixels_per_level: Horizontal distance that makes up one level

    Returns:
        A non-negative depth, there is no upper bound
    """
    if pixels_per_level <= 0:
        raise ValueError(f"pixels_per_level must be positive, got {pixels_per_level}")
    return math.floor(abs(container_left - pointer_x) / pixels_per_level)
