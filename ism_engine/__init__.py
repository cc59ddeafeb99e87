"""
Interpretive Structural Modelling (ISM) Engine

Turns pairwise influence judgments between elements into a layered
hierarchy.

MODULE STRUCTURE:
=================

1. CONTRACTS (contracts/)
   - Immutable data: Relation, BinaryMatrix, LevelPartition,
     AnalysisResult, Error/Result
   - MUST NOT: Contain algorithms or side effects

2. CORE ALGORITHMS (core/)
   - Relation Encoder:  SSIM -> Initial Reachability Matrix (IRM)
   - Closure Computer:  IRM -> Final Reachability Matrix (FRM)
   - Level Partitioner: FRM -> levels
   - Canonicalizer:     FRM -> canonical matrix
   - MICMAC and hierarchy topology over a finished result
   - MUST NOT: Perform I/O or mutate caller data

3. ENGINE (engine.py)
   - Composes the pipeline, converts precondition violations into
     Result.failure and records an audit trail

4. OBSERVABILITY (observability/)
   - Append-only audit entries per run

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: matrices are tuples, bundles are frozen
- Deterministic: identical inputs always produce identical outputs
- Absent judgments are O, never an error
"""

from .config import AnalysisConfig, EngineConfig
from .contracts import (
    AnalysisResult, BinaryMatrix, Error, ErrorCode, InvalidInputError,
    LevelPartition, Relation, RelationLookup, Result,
)
from .core import (
    compute_final_reachability_matrix, compute_micmac, convert_ssim_to_irm,
    get_canonical_matrix, perform_level_partitioning, HierarchyTopology,
)
from .engine import ISMAnalysisEngine, run_ism_analysis

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig", "EngineConfig",
    "AnalysisResult", "BinaryMatrix", "Error", "ErrorCode", "InvalidInputError",
    "LevelPartition", "Relation", "RelationLookup", "Result",
    "compute_final_reachability_matrix", "compute_micmac", "convert_ssim_to_irm",
    "get_canonical_matrix", "perform_level_partitioning", "HierarchyTopology",
    "ISMAnalysisEngine", "run_ism_analysis",
]
