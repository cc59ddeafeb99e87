"""
Contracts shared by every engine module.

Only pure, immutable data lives here.
"""

from .base import ErrorCode, Error, Result, Timestamp, InvalidInputError
from .relations import Relation, RelationLookup, SSIMData, UnresolvedRelation
from .results import (
    BinaryMatrix, LevelPartition, AnalysisResult,
    zero_matrix, thaw_matrix, freeze_matrix, validate_square,
)

__all__ = [
    "ErrorCode", "Error", "Result", "Timestamp", "InvalidInputError",
    "Relation", "RelationLookup", "SSIMData", "UnresolvedRelation",
    "BinaryMatrix", "LevelPartition", "AnalysisResult",
    "zero_matrix", "thaw_matrix", "freeze_matrix", "validate_square",
]
