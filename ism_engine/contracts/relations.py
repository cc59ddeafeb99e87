"""
Relation Contracts

Pairwise influence judgments (the SSIM: Structural Self-Interaction Matrix).

A judgment is stored once per unordered pair (i, j) with i < j and read
directionally:

    V  i influences j
    A  j influences i
    X  mutual influence
    O  no direct influence
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .base import ErrorCode, InvalidInputError


class Relation(Enum):
    """Symbolic SSIM judgment for an ordered pair (i, j), i < j."""
    V = "V"  # i reaches j
    A = "A"  # j reaches i
    X = "X"  # both reach each other
    O = "O"  # no relation

    @staticmethod
    def parse(raw: Union[Relation, str, None]) -> Relation:
        """
        Strict parse for SSIM documents loaded by callers.

        None and the empty string are an absent judgment and resolve to O.
        Anything outside {V, A, X, O} (case-insensitive) is rejected.
        The engine itself reads judgments through RelationLookup, which
        never rejects a value.
        """
        if isinstance(raw, Relation):
            return raw
        if raw is None:
            return Relation.O
        if not isinstance(raw, str):
            raise InvalidInputError.of(
                ErrorCode.INVALID_RELATION,
                f"Relation must be one of V, A, X, O; got {raw!r}",
            )
        value = raw.strip().upper()
        if not value:
            return Relation.O
        try:
            return Relation(value)
        except ValueError:
            raise InvalidInputError.of(
                ErrorCode.INVALID_RELATION,
                f"Relation must be one of V, A, X, O; got {raw!r}",
            ) from None

    @staticmethod
    def resolve(raw: object) -> Optional[Relation]:
        """
        Exact match only: a Relation or one of "V", "A", "X", "O".

        Returns None for anything else; callers decide what that means.
        """
        if isinstance(raw, Relation):
            return raw
        if isinstance(raw, str):
            try:
                return Relation(raw)
            except ValueError:
                return None
        return None

    @property
    def forward(self) -> int:
        """Cell value M[i][j] this judgment produces."""
        return 1 if self in (Relation.V, Relation.X) else 0

    @property
    def backward(self) -> int:
        """Cell value M[j][i] this judgment produces."""
        return 1 if self in (Relation.A, Relation.X) else 0


# Two-level mapping: identifier -> identifier -> judgment.
SSIMData = Mapping[str, Mapping[str, Union[Relation, str]]]


@dataclass(frozen=True)
class UnresolvedRelation:
    """A stored judgment that is not V, A, X or O; it was read as O."""
    i: int
    j: int
    raw: object

    def describe(self, ids: Sequence[str]) -> str:
        return (
            f"Unrecognized relation {self.raw!r} between "
            f"{ids[self.i]!r} and {ids[self.j]!r} treated as O"
        )


class RelationLookup:
    """
    Total lookup over element positions.

    `lookup(i, j)` always returns a Relation: an absent entry, an absent
    row, a position without an identifier and an unrecognized value all
    resolve to O. Unrecognized values are kept in `unresolved`.
    Only the upper triangle is meaningful; callers pass i < j.
    """

    def __init__(self, ids: Sequence[str], ssim: Optional[SSIMData]):
        self._ids = tuple(ids or ())
        self._ssim = ssim or {}
        self._unresolved: List[UnresolvedRelation] = []

    @property
    def ids(self) -> Tuple[str, ...]:
        return self._ids

    @property
    def unresolved(self) -> Tuple[UnresolvedRelation, ...]:
        return tuple(self._unresolved)

    def identifier(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._ids):
            return self._ids[index]
        return None

    def lookup(self, i: int, j: int) -> Relation:
        id_i = self.identifier(i)
        id_j = self.identifier(j)
        if id_i is None or id_j is None:
            return Relation.O

        row = self._ssim.get(id_i)
        if not isinstance(row, Mapping):
            return Relation.O

        raw = row.get(id_j)
        if raw is None:
            return Relation.O

        relation = Relation.resolve(raw)
        if relation is None:
            self._unresolved.append(UnresolvedRelation(i=i, j=j, raw=raw))
            return Relation.O
        return relation

    __call__ = lookup
