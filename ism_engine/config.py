"""
Engine Configuration

AnalysisConfig and ObservabilityConfig are frozen: they do not change
during a run, and changes require a new instance. EngineConfig is a plain
dataclass that fills in defaults for the sections it composes.

Environment overrides (read by EngineConfig.from_env):
    ISM_STRICT_IDENTIFIERS   "1"/"true" or "0"/"false"
    ISM_LEVEL_CAP_MARGIN     int
    ISM_MICMAC_SPLIT         float
    ISM_AUDIT_ENABLED        "1"/"true" or "0"/"false"
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os

from .contracts.base import ErrorCode, InvalidInputError
from .core.partition import DEFAULT_CAP_MARGIN
from .observability import ObservabilityConfig

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidInputError.of(
        ErrorCode.INVALID_INPUT, f"{name} must be a boolean, got {raw!r}", variable=name
    )


def _parse_number(name: str, raw: str, kind):
    try:
        return kind(raw)
    except ValueError:
        raise InvalidInputError.of(
            ErrorCode.INVALID_INPUT, f"{name} must be a {kind.__name__}, got {raw!r}", variable=name
        ) from None


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Pipeline behavior.

    strict_identifiers: an identifier list shorter than the element count
        fails the run. When False the run continues and the missing
        positions resolve to O.
    level_cap_margin: level partitioning stops after N + margin levels.
    micmac_split: MICMAC quadrant split point; None means N / 2.
    """
    strict_identifiers: bool = True
    level_cap_margin: int = DEFAULT_CAP_MARGIN
    micmac_split: Optional[float] = None

    def __post_init__(self):
        if self.level_cap_margin < 0:
            raise InvalidInputError.of(
                ErrorCode.INVALID_INPUT,
                f"level_cap_margin must be non-negative, got {self.level_cap_margin}",
            )


@dataclass
class EngineConfig:
    """Unified configuration for the engine."""
    analysis: AnalysisConfig = None
    observability: ObservabilityConfig = None

    def __post_init__(self):
        self.analysis = self.analysis or AnalysisConfig()
        self.observability = self.observability or ObservabilityConfig()

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
        env = os.environ if environ is None else environ
        defaults = AnalysisConfig()

        strict = defaults.strict_identifiers
        if "ISM_STRICT_IDENTIFIERS" in env:
            strict = _parse_bool("ISM_STRICT_IDENTIFIERS", env["ISM_STRICT_IDENTIFIERS"])

        margin = defaults.level_cap_margin
        if "ISM_LEVEL_CAP_MARGIN" in env:
            margin = _parse_number("ISM_LEVEL_CAP_MARGIN", env["ISM_LEVEL_CAP_MARGIN"], int)
            if margin < 0:
                raise InvalidInputError.of(
                    ErrorCode.INVALID_INPUT,
                    f"ISM_LEVEL_CAP_MARGIN must be non-negative, got {margin}",
                    variable="ISM_LEVEL_CAP_MARGIN",
                )

        split = defaults.micmac_split
        if env.get("ISM_MICMAC_SPLIT"):
            split = _parse_number("ISM_MICMAC_SPLIT", env["ISM_MICMAC_SPLIT"], float)

        audit = True
        if "ISM_AUDIT_ENABLED" in env:
            audit = _parse_bool("ISM_AUDIT_ENABLED", env["ISM_AUDIT_ENABLED"])

        return EngineConfig(
            analysis=AnalysisConfig(
                strict_identifiers=strict,
                level_cap_margin=margin,
                micmac_split=split,
            ),
            observability=ObservabilityConfig(enable_audit=audit),
        )
