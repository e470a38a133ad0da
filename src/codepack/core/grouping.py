# src/codepack/core/grouping.py
from typing import AbstractSet, Dict, List, Sequence


def group_connected(
    sequence: Sequence[int],
    related: Sequence[AbstractSet[int]],
) -> List[int]:
    """
    Reorders `sequence` so files joined by imports are contiguous.

    Only edges between members of `sequence` count. Within a component the
    incoming relative order is kept; components appear in the order of their
    earliest member.
    """
    position: Dict[int, int] = {index: pos for pos, index in enumerate(sequence)}
    visited = set()
    grouped: List[int] = []

    for start in sequence:
        if start in visited:
            continue

        component: List[int] = []
        stack = [start]
        visited.add(start)
        while stack:
            node = stack.pop()
            component.append(node)
            for neighbour in related[node]:
                if neighbour in position and neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(neighbour)

        component.sort(key=position.__getitem__)
        grouped.extend(component)

    return grouped
