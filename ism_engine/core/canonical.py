"""
Canonicalizer
=============

FRM -> canonical (skeleton) matrix for hierarchy drawing.

A direct edge i -> j is dropped when the closure already holds a two-hop
path i -> k -> j through some k distinct from i and j. Self-loops are
stripped. Only two-hop redundancy is checked; the result is not a minimum
equivalent graph.
"""

from __future__ import annotations
from typing import Sequence

from ..contracts.results import BinaryMatrix, freeze_matrix, thaw_matrix, validate_square


def has_intermediate(frm: Sequence[Sequence[int]], i: int, j: int) -> bool:
    return any(
        k != i and k != j and frm[i][k] == 1 and frm[k][j] == 1
        for k in range(len(frm))
    )


def get_canonical_matrix(frm: Sequence[Sequence[int]]) -> BinaryMatrix:
    size = validate_square(frm)
    skeleton = thaw_matrix(frm)

    for i in range(size):
        skeleton[i][i] = 0

    for i in range(size):
        for j in range(size):
            # Intermediates are looked up in the closure, not in the skeleton
            if skeleton[i][j] == 1 and has_intermediate(frm, i, j):
                skeleton[i][j] = 0

    return freeze_matrix(skeleton)
