"""
Level Partitioner
=================

FRM -> ordered hierarchy levels.

For every element i still unassigned, restricted to the remaining set R:

    Reach(i) = { j in R : FRM[i][j] = 1 }
    Ante(i)  = { j in R : FRM[j][i] = 1 }

i joins the current level iff Reach(i) is a subset of Ante(i), i.e.
|Reach(i)| == |Reach(i) & Ante(i)|. Levels are emitted top first: the
first level holds elements with no unresolved downstream dependents,
the last level holds the base drivers.

If no remaining element qualifies, the remainder is a cycle the layering
rule cannot separate and is flushed as one final level.
"""

from __future__ import annotations
from typing import List, Sequence, Set, Tuple

from ..contracts.results import LevelPartition, validate_square

DEFAULT_CAP_MARGIN = 5


def reachability_set(frm: Sequence[Sequence[int]], i: int, remaining: Sequence[int]) -> Set[int]:
    return {j for j in remaining if frm[i][j] == 1}


def antecedent_set(frm: Sequence[Sequence[int]], i: int, remaining: Sequence[int]) -> Set[int]:
    return {j for j in remaining if frm[j][i] == 1}


def qualifies_for_level(frm: Sequence[Sequence[int]], i: int, remaining: Sequence[int]) -> bool:
    reach = reachability_set(frm, i, remaining)
    intersection = reach & antecedent_set(frm, i, remaining)
    return len(reach) == len(intersection)


def perform_level_partitioning(
    frm: Sequence[Sequence[int]],
    cap_margin: int = DEFAULT_CAP_MARGIN
) -> Tuple[LevelPartition, ...]:
    """
    Partition all element indices of `frm` into levels numbered from 1.

    Within a level, elements are listed in ascending index order. The loop
    stops after `size + cap_margin` levels even for a malformed closure.
    """
    size = validate_square(frm)
    assigned = [False] * size
    levels: List[LevelPartition] = []
    current_level = 1
    max_levels = size + cap_margin

    while True:
        remaining = [i for i in range(size) if not assigned[i]]
        if not remaining:
            break

        selected = [i for i in remaining if qualifies_for_level(frm, i, remaining)]

        if not selected:
            levels.append(LevelPartition(level=current_level, elements=tuple(remaining)))
            break

        levels.append(LevelPartition(level=current_level, elements=tuple(selected)))
        for i in selected:
            assigned[i] = True
        current_level += 1

        if current_level > max_levels:
            break

    return tuple(levels)
