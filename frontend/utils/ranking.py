from typing import Any, Dict, List, Optional


def move_item(items: List[Dict[str, Any]], index: int, offset: int) -> Optional[List[Dict[str, Any]]]:
    """Swap the item at ``index`` with its neighbour ``offset`` places away.

    Returns a new list, or None when the move would leave the list
    (first item up, last item down).
    """
    target = index + offset
    if index < 0 or index >= len(items) or target < 0 or target >= len(items):
        return None

    reordered = list(items)
    reordered[index], reordered[target] = reordered[target], reordered[index]
    return reordered


def rank_assignments(items: List[Dict[str, Any]]) -> List[Dict[str, int]]:
    """Contiguous 1..N ranks matching list position."""
    return [{"id": item["id"], "rank": position + 1} for position, item in enumerate(items)]
