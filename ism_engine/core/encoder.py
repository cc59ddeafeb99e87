"""
Relation Encoder
================

SSIM judgments -> Initial Reachability Matrix (IRM).

Only the upper triangle (i < j) is consulted. Self-reachability is
axiomatic, so every diagonal cell is 1.
"""

from __future__ import annotations
from typing import Optional, Sequence

from ..contracts.base import ErrorCode, InvalidInputError
from ..contracts.relations import RelationLookup, SSIMData
from ..contracts.results import BinaryMatrix, freeze_matrix, zero_matrix


def convert_ssim_to_irm(
    size: int,
    ids: Sequence[str],
    ssim: Optional[SSIMData],
    lookup: Optional[RelationLookup] = None
) -> BinaryMatrix:
    """
    Build the N x N IRM.

    An absent or unrecognized judgment is the same as O. Positions without
    an identifier (ids shorter than size) also resolve to O. Pass `lookup`
    to inspect which stored values were unrecognized afterwards.
    """
    if size < 0:
        raise InvalidInputError.of(
            ErrorCode.INVALID_INPUT,
            f"Element count must be non-negative, got {size}",
            size=size,
        )

    lookup = lookup or RelationLookup(ids, ssim)
    matrix = zero_matrix(size)

    for i in range(size):
        matrix[i][i] = 1
        for j in range(i + 1, size):
            relation = lookup(i, j)
            matrix[i][j] = relation.forward
            matrix[j][i] = relation.backward

    return freeze_matrix(matrix)
