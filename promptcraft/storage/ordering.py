from typing import Optional, Tuple


def insert_position(requested: Optional[int], count: int) -> int:
    """Position a new prompt lands on in a collection holding `count` prompts."""
    if requested is None:
        return count
    return max(0, min(requested, count))


def move_target(requested: int, count: int) -> int:
    """Clamp the target of a move to the positions that already exist."""
    return max(0, min(requested, count - 1))


def shift_window(current: int, target: int) -> Optional[Tuple[int, int, int]]:
    """Neighbours that shift when a prompt moves from `current` to `target`.

    Returns `(low, high, delta)`: every other prompt whose order lies in
    `[low, high]` changes by `delta`. None when the prompt stays put.
    """
    if target < current:
        return target, current - 1, 1
    if target > current:
        return current + 1, target, -1
    return None
