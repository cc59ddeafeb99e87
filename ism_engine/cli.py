"""
ISM Analysis CLI
================

Runs the ISM pipeline on an SSIM document and prints the results.

COMMANDS:
- analyze: Matrices, levels, canonical edges and MICMAC quadrants
- levels:  Level partition only

USAGE:
    python -m ism_engine.cli analyze model.json [--json] [--lenient]
"""
import argparse
import json
import sys
from typing import List, Optional, Sequence

from .config import AnalysisConfig, EngineConfig
from .contracts.base import InvalidInputError
from .contracts.results import AnalysisResult
from .core.closure import transitive_entries
from .core.topology import strongly_connected_clusters
from .domain.serialization import load_ssim_document, result_to_json
from .engine import ISMAnalysisEngine


def load_document(path: str):
    with open(path, 'r', encoding='utf-8') as f:
        return load_ssim_document(json.load(f))


def build_engine(args) -> ISMAnalysisEngine:
    config = EngineConfig.from_env()
    if getattr(args, "lenient", False):
        analysis = config.analysis
        config = EngineConfig(
            analysis=AnalysisConfig(
                strict_identifiers=False,
                level_cap_margin=analysis.level_cap_margin,
                micmac_split=analysis.micmac_split,
            ),
            observability=config.observability,
        )
    return ISMAnalysisEngine(config)


def render_matrix(matrix: Sequence[Sequence[int]], starred=()) -> List[str]:
    """Text table with 1-based headers; starred cells print as 1*."""
    starred = set(starred)
    size = len(matrix)
    lines = ["     " + "".join(f"{j + 1:>4}" for j in range(size))]
    for i, row in enumerate(matrix):
        cells = "".join(
            f"{'1*' if (i, j) in starred else str(cell):>4}" for j, cell in enumerate(row)
        )
        lines.append(f"{i + 1:>4} {cells}")
    return lines


def label(names: Sequence[str], index: int) -> str:
    return names[index] if index < len(names) else str(index)


def render_levels(result: AnalysisResult, names: Sequence[str]) -> List[str]:
    lines = []
    for partition in result.levels:
        labels = ", ".join(label(names, i) for i in partition.elements)
        lines.append(f"Level {partition.level}: {labels}")
    return lines


def cmd_analyze(args) -> int:
    ids, ssim, names = load_document(args.file)
    engine = build_engine(args)
    outcome = engine.analyze(len(ids) if args.size is None else args.size, ids, ssim)
    if outcome.is_failure:
        print(f"[!] {outcome.error.code.name}: {outcome.error.message}")
        return 1

    result = outcome.value
    micmac = engine.micmac(result)

    if args.json:
        print(result_to_json(result, micmac=micmac))
        return 0

    for warning in result.warnings:
        print(f"[WARN] {warning}")

    print("INITIAL REACHABILITY MATRIX")
    print("\n".join(render_matrix(result.irm)))
    print("\nFINAL REACHABILITY MATRIX (1* = added by transitivity)")
    print("\n".join(render_matrix(result.frm, transitive_entries(result.irm, result.frm))))

    print("\nLEVELS")
    print("\n".join(render_levels(result, names)))

    print("\nCANONICAL EDGES")
    for i, row in enumerate(result.canonical_matrix):
        for j, cell in enumerate(row):
            if cell == 1:
                print(f"  {label(names, i)} -> {label(names, j)}")

    clusters = strongly_connected_clusters(result.frm)
    if clusters:
        print("\nCYCLES")
        for cluster in clusters:
            print("  " + " <-> ".join(label(names, i) for i in cluster))

    print(f"\nMICMAC (split at {micmac.split_point:g})")
    for title, points in (
        ("IV. Drivers", micmac.drivers),
        ("III. Linkage", micmac.linkage),
        ("I. Autonomous", micmac.autonomous),
        ("II. Dependent", micmac.dependent),
    ):
        members = ", ".join(
            f"{label(names, p.index)} (Dr {p.driving_power}, Dep {p.dependence_power})" for p in points
        )
        print(f"  {title}: {members or '-'}")
    return 0


def cmd_levels(args) -> int:
    ids, ssim, names = load_document(args.file)
    outcome = build_engine(args).analyze(len(ids), ids, ssim)
    if outcome.is_failure:
        print(f"[!] {outcome.error.code.name}: {outcome.error.message}")
        return 1
    print("\n".join(render_levels(outcome.value, names)))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Interpretive Structural Modelling")
    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser("analyze", help="Run the full analysis")
    analyze_parser.add_argument("file", help="SSIM document (JSON)")
    analyze_parser.add_argument("--json", action="store_true", help="Print the result bundle as JSON")
    analyze_parser.add_argument("--size", type=int, default=None, help="Override the element count")
    analyze_parser.add_argument("--lenient", action="store_true",
                                help="Tolerate fewer identifiers than elements")

    levels_parser = subparsers.add_parser("levels", help="Print the level partition")
    levels_parser.add_argument("file", help="SSIM document (JSON)")
    levels_parser.add_argument("--lenient", action="store_true",
                               help="Tolerate fewer identifiers than elements")

    args = parser.parse_args(argv)

    try:
        if args.command == "analyze":
            return cmd_analyze(args)
        elif args.command == "levels":
            return cmd_levels(args)
    except (OSError, json.JSONDecodeError) as e:
        print(f"[!] Failed to read {args.file}: {e}")
        return 1
    except InvalidInputError as e:
        print(f"[!] {e.code.name}: {e}")
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
