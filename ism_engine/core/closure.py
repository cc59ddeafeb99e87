"""
Closure Computer
================

IRM -> Final Reachability Matrix (FRM) by Warshall's algorithm.
If i reaches k and k reaches j, then i reaches j.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple

from ..contracts.results import BinaryMatrix, freeze_matrix, thaw_matrix, validate_square


def compute_final_reachability_matrix(irm: Sequence[Sequence[int]]) -> BinaryMatrix:
    """Transitive closure of `irm`. The input is never modified."""
    size = validate_square(irm)
    matrix = thaw_matrix(irm)

    for k in range(size):
        row_k = matrix[k]
        for i in range(size):
            if matrix[i][k] != 1:
                continue
            row_i = matrix[i]
            for j in range(size):
                if row_k[j] == 1:
                    row_i[j] = 1

    return freeze_matrix(matrix)


def transitive_entries(
    irm: Sequence[Sequence[int]],
    frm: Sequence[Sequence[int]]
) -> List[Tuple[int, int]]:
    """Cells the closure added to the IRM (the "1*" entries), row-major."""
    size = validate_square(irm)
    return [
        (i, j)
        for i in range(size)
        for j in range(size)
        if frm[i][j] == 1 and irm[i][j] == 0
    ]
