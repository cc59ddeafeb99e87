"""
Engine Orchestration Module

Composes the ISM pipeline and exposes it to callers.

PIPELINE:
=========
1. Relation Encoder:  SSIM judgments -> IRM
2. Closure Computer:  IRM -> FRM
3. Canonicalizer:     FRM -> canonical matrix
4. Level Partitioner: FRM -> levels

DESIGN PRINCIPLES:
==================
1. Every run starts from a snapshot of its inputs and returns a new,
   immutable AnalysisResult; results are never patched
2. The pure pipeline raises InvalidInputError on precondition violations;
   the engine boundary converts them into Result.failure
3. Identical inputs always produce identical outputs
"""

from __future__ import annotations
from typing import List, Mapping, Optional, Sequence
import hashlib
import logging

from .config import AnalysisConfig, EngineConfig
from .contracts.base import ErrorCode, InvalidInputError, Result
from .contracts.relations import Relation, RelationLookup, SSIMData
from .contracts.results import AnalysisResult
from .core.canonical import get_canonical_matrix
from .core.closure import compute_final_reachability_matrix
from .core.encoder import convert_ssim_to_irm
from .core.micmac import MicmacReport, compute_micmac
from .core.partition import perform_level_partitioning
from .core.topology import HierarchyTopology
from .observability import AuditEventType, AuditLogCollector, AuditLogEntry

logger = logging.getLogger(__name__)


def check_identifiers(size: int, ids: Sequence[str], strict: bool) -> List[str]:
    """
    Compare the identifier list with the element count.

    Returns warnings for tolerated mismatches. A list shorter than `size`
    raises IDENTIFIER_MISMATCH when `strict`.
    """
    if size < 0:
        raise InvalidInputError.of(
            ErrorCode.INVALID_INPUT,
            f"Element count must be non-negative, got {size}",
            size=size,
        )

    if len(ids) == size:
        return []

    message = f"Identifier count {len(ids)} does not match element count {size}"
    if len(ids) < size and strict:
        raise InvalidInputError.of(
            ErrorCode.IDENTIFIER_MISMATCH, message, size=size, identifiers=len(ids)
        )

    logger.warning("ISM input mismatch: %s", message)
    return [message]


def run_ism_analysis(
    size: int,
    ids: Optional[Sequence[str]],
    ssim: Optional[SSIMData],
    config: Optional[AnalysisConfig] = None
) -> AnalysisResult:
    """Run the full pipeline and return the four-part bundle."""
    config = config or AnalysisConfig()
    ids = tuple(ids or ())
    warnings = check_identifiers(size, ids, config.strict_identifiers)

    lookup = RelationLookup(ids, ssim)
    irm = convert_ssim_to_irm(size, ids, ssim, lookup=lookup)
    for unresolved in lookup.unresolved:
        message = unresolved.describe(ids)
        logger.warning("ISM input: %s", message)
        warnings.append(message)

    frm = compute_final_reachability_matrix(irm)
    canonical = get_canonical_matrix(frm)
    levels = perform_level_partitioning(frm, cap_margin=config.level_cap_margin)

    return AnalysisResult(
        irm=irm,
        frm=frm,
        canonical_matrix=canonical,
        levels=levels,
        element_ids=ids[:size],
        warnings=tuple(warnings),
    )


class ISMAnalysisEngine:
    """
    Engine boundary used by presentation layers.

    analyze() never raises for bad input: precondition violations come
    back as Result.failure carrying the Error. Each run is recorded in
    the audit log.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._audit = AuditLogCollector(self._config.observability)

    @property
    def config(self) -> EngineConfig:
        return self._config

    def analyze(
        self,
        size: int,
        ids: Optional[Sequence[str]],
        ssim: Optional[SSIMData]
    ) -> Result:
        run_id = self._run_id(size, ids, ssim)
        self._audit.record(AuditEventType.ANALYSIS, "analysis_started", run_id, size=size)

        try:
            result = run_ism_analysis(size, ids, ssim, self._config.analysis)
        except InvalidInputError as exc:
            self._audit.record(
                AuditEventType.ERROR, "analysis_rejected", run_id,
                code=exc.code.name, message=str(exc),
            )
            return Result.failure(exc.error)

        for warning in result.warnings:
            self._audit.record(AuditEventType.WARNING, "input_warning", run_id, message=warning)

        self._audit.record(
            AuditEventType.ANALYSIS, "analysis_completed", run_id,
            size=result.size, levels=result.level_count,
        )
        return Result.success(result)

    def micmac(self, result: AnalysisResult) -> MicmacReport:
        return compute_micmac(
            result.frm, result.element_ids, split_point=self._config.analysis.micmac_split
        )

    def topology(self, result: AnalysisResult) -> HierarchyTopology:
        topology = HierarchyTopology()
        topology.build_graph(result)
        return topology

    def get_audit_log(self, event_type: Optional[AuditEventType] = None) -> List[AuditLogEntry]:
        return self._audit.get_entries(event_type)

    @staticmethod
    def _run_id(size: int, ids: Optional[Sequence[str]], ssim: Optional[SSIMData]) -> str:
        """Digest of the full input snapshot: count, identifiers and relation table."""
        relations = sorted(
            (str(source), str(target), value.value if isinstance(value, Relation) else str(value))
            for source, row in (ssim or {}).items()
            if isinstance(row, Mapping)
            for target, value in row.items()
        )
        content = f"{size}|{'|'.join(str(i) for i in (ids or ()))}|{relations!r}"
        return f"run_{hashlib.sha256(content.encode('utf-8')).hexdigest()[:12]}"
