"""
MICMAC Analysis
===============

Driving / dependence power classification over the FRM.

    driving power    = row sum    (how many elements i reaches)
    dependence power = column sum (how many elements reach i)

Both sums include the self-loop. The split point defaults to N / 2.

Quadrants:
    I.   autonomous  weak driving, weak dependence
    II.  dependent   weak driving, strong dependence
    III. linkage     strong driving, strong dependence
    IV.  driver      strong driving, weak dependence
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..contracts.results import validate_square


class MicmacQuadrant(Enum):
    AUTONOMOUS = "autonomous"
    DEPENDENT = "dependent"
    LINKAGE = "linkage"
    DRIVER = "driver"


@dataclass(frozen=True)
class MicmacPoint:
    index: int
    identifier: str
    driving_power: int
    dependence_power: int
    quadrant: MicmacQuadrant


@dataclass(frozen=True)
class MicmacReport:
    split_point: float
    points: Tuple[MicmacPoint, ...]

    def quadrant(self, quadrant: MicmacQuadrant) -> Tuple[MicmacPoint, ...]:
        return tuple(p for p in self.points if p.quadrant == quadrant)

    @property
    def autonomous(self) -> Tuple[MicmacPoint, ...]:
        return self.quadrant(MicmacQuadrant.AUTONOMOUS)

    @property
    def dependent(self) -> Tuple[MicmacPoint, ...]:
        return self.quadrant(MicmacQuadrant.DEPENDENT)

    @property
    def linkage(self) -> Tuple[MicmacPoint, ...]:
        return self.quadrant(MicmacQuadrant.LINKAGE)

    @property
    def drivers(self) -> Tuple[MicmacPoint, ...]:
        return self.quadrant(MicmacQuadrant.DRIVER)

    def to_dict(self) -> Dict[str, object]:
        return {
            "split_point": self.split_point,
            "points": [
                {
                    "index": p.index,
                    "identifier": p.identifier,
                    "driving_power": p.driving_power,
                    "dependence_power": p.dependence_power,
                    "quadrant": p.quadrant.value,
                }
                for p in self.points
            ],
        }


def classify(driving: float, dependence: float, split_point: float) -> MicmacQuadrant:
    if driving <= split_point and dependence <= split_point:
        return MicmacQuadrant.AUTONOMOUS
    if driving <= split_point and dependence > split_point:
        return MicmacQuadrant.DEPENDENT
    if driving > split_point and dependence > split_point:
        return MicmacQuadrant.LINKAGE
    return MicmacQuadrant.DRIVER


def compute_micmac(
    frm: Sequence[Sequence[int]],
    ids: Sequence[str] = (),
    split_point: Optional[float] = None
) -> MicmacReport:
    size = validate_square(frm)
    if split_point is None:
        split_point = size / 2

    matrix = np.asarray(frm, dtype=np.int64).reshape(size, size)
    driving = matrix.sum(axis=1)
    dependence = matrix.sum(axis=0)

    points = []
    for i in range(size):
        points.append(MicmacPoint(
            index=i,
            identifier=ids[i] if i < len(ids) else str(i),
            driving_power=int(driving[i]),
            dependence_power=int(dependence[i]),
            quadrant=classify(int(driving[i]), int(dependence[i]), split_point),
        ))

    return MicmacReport(split_point=float(split_point), points=tuple(points))
