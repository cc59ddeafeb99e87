"""
Core ISM Algorithms

RESPONSIBILITY: Reachability computation, level partitioning, reduction
ALLOWED INPUTS: Element count, identifiers, SSIM judgments, binary matrices
OUTPUTS: Immutable matrices and level partitions

WHAT THIS LAYER MUST NOT DO:
============================
- Perform I/O or persist results
- Render anything
- Mutate caller-owned matrices (every algorithm works on a copy)
"""

from .encoder import convert_ssim_to_irm
from .closure import compute_final_reachability_matrix, transitive_entries
from .partition import (
    perform_level_partitioning, reachability_set, antecedent_set,
    qualifies_for_level, DEFAULT_CAP_MARGIN,
)
from .canonical import get_canonical_matrix, has_intermediate
from .micmac import MicmacQuadrant, MicmacPoint, MicmacReport, compute_micmac, classify
from .topology import (
    HierarchyTopology, HierarchyMetrics, HierarchyLink,
    hierarchy_links, strongly_connected_clusters, matrix_to_digraph,
)

__all__ = [
    "convert_ssim_to_irm",
    "compute_final_reachability_matrix", "transitive_entries",
    "perform_level_partitioning", "reachability_set", "antecedent_set",
    "qualifies_for_level", "DEFAULT_CAP_MARGIN",
    "get_canonical_matrix", "has_intermediate",
    "MicmacQuadrant", "MicmacPoint", "MicmacReport", "compute_micmac", "classify",
    "HierarchyTopology", "HierarchyMetrics", "HierarchyLink",
    "hierarchy_links", "strongly_connected_clusters", "matrix_to_digraph",
]
