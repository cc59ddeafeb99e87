"""
Deterministic Replay Test
Verifies that repeated runs and independent engines agree bit for bit,
and that the pipeline never mutates caller-owned inputs.
"""

import copy

from ism_engine.engine import ISMAnalysisEngine, run_ism_analysis

IDS = ["cost", "skills", "tools", "quality", "trust"]
SSIM = {
    "cost": {"skills": "V", "tools": "V", "quality": "O", "trust": "O"},
    "skills": {"tools": "X", "quality": "V"},
    "tools": {"quality": "V", "trust": "O"},
    "quality": {"trust": "V"},
}


def test_golden_replay_determinism():
    """For identical inputs, every run yields the same bundle."""
    results = [run_ism_analysis(len(IDS), IDS, SSIM) for _ in range(3)]

    assert results[0] == results[1] == results[2]


def test_independent_engines_agree():
    first = ISMAnalysisEngine().analyze(len(IDS), IDS, SSIM).value
    second = ISMAnalysisEngine().analyze(len(IDS), IDS, SSIM).value

    assert first == second


def test_golden_levels():
    result = run_ism_analysis(len(IDS), IDS, SSIM)

    assert [list(p.elements) for p in result.levels] == [[4], [3], [1, 2], [0]]


def test_inputs_not_mutated():
    ids = list(IDS)
    ssim = copy.deepcopy(SSIM)

    run_ism_analysis(len(ids), ids, ssim)

    assert ids == IDS
    assert ssim == SSIM
