"""
Result Contracts

Binary matrices, level partitions and the analysis bundle.

All matrices crossing a module boundary are tuples of tuples of 0/1 ints.
Algorithms thaw a working copy, mutate it locally, and freeze it again, so
no caller-owned data is ever modified.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .base import ErrorCode, InvalidInputError


BinaryMatrix = Tuple[Tuple[int, ...], ...]


def zero_matrix(size: int) -> List[List[int]]:
    return [[0] * size for _ in range(size)]


def thaw_matrix(matrix: Sequence[Sequence[int]]) -> List[List[int]]:
    """Mutable deep copy of a matrix."""
    return [list(row) for row in matrix]


def freeze_matrix(matrix: Sequence[Sequence[int]]) -> BinaryMatrix:
    return tuple(tuple(int(cell) for cell in row) for row in matrix)


def validate_square(matrix: Sequence[Sequence[int]]) -> int:
    """Return the size of a square matrix, raising on ragged input."""
    size = len(matrix)
    for index, row in enumerate(matrix):
        if len(row) != size:
            raise InvalidInputError.of(
                ErrorCode.NON_SQUARE_MATRIX,
                f"Row {index} has {len(row)} cells, expected {size}",
                row=index,
            )
    return size


@dataclass(frozen=True)
class LevelPartition:
    """One hierarchy level: its number (from 1) and its element indices."""
    level: int
    elements: Tuple[int, ...]

    def __post_init__(self):
        if self.level < 1:
            raise ValueError("level numbers start at 1")
        object.__setattr__(self, 'elements', tuple(sorted(self.elements)))

    def __contains__(self, index: int) -> bool:
        return index in self.elements

    def to_dict(self) -> Dict[str, object]:
        return {"level": self.level, "elements": list(self.elements)}


@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable bundle produced once per analysis run.

    Never patched in place: when inputs change the pipeline is re-run and
    a new bundle replaces this one.
    """
    irm: BinaryMatrix
    frm: BinaryMatrix
    canonical_matrix: BinaryMatrix
    levels: Tuple[LevelPartition, ...]
    element_ids: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.irm)

    @property
    def level_count(self) -> int:
        return len(self.levels)

    def level_map(self) -> Dict[int, int]:
        """Element index -> level number."""
        return {
            index: partition.level
            for partition in self.levels
            for index in partition.elements
        }

    def level_of(self, index: int) -> Optional[int]:
        for partition in self.levels:
            if index in partition:
                return partition.level
        return None

    def identifier(self, index: int) -> str:
        if 0 <= index < len(self.element_ids):
            return self.element_ids[index]
        return str(index)

    def to_dict(self) -> Dict[str, object]:
        return {
            "initial_reachability_matrix": [list(row) for row in self.irm],
            "final_reachability_matrix": [list(row) for row in self.frm],
            "canonical_matrix": [list(row) for row in self.canonical_matrix],
            "levels": [partition.to_dict() for partition in self.levels],
            "element_ids": list(self.element_ids),
            "warnings": list(self.warnings),
        }
