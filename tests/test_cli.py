"""
CLI Tests
=========
"""

import json

import pytest

from ism_engine.cli import main, render_matrix


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ISM_STRICT_IDENTIFIERS", "ISM_LEVEL_CAP_MARGIN", "ISM_MICMAC_SPLIT", "ISM_AUDIT_ENABLED"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chain_file(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(json.dumps({
        "factors": [
            {"id": "f1", "name": "Funding"},
            {"id": "f2", "name": "Staffing"},
            {"id": "f3", "name": "Quality"},
        ],
        "relations": {"f1": {"f2": "V"}, "f2": {"f3": "V"}},
    }))
    return str(path)


class TestCli:

    def test_levels_command(self, chain_file, capsys):
        assert main(["levels", chain_file]) == 0

        out = capsys.readouterr().out.splitlines()
        assert out == ["Level 1: Quality", "Level 2: Staffing", "Level 3: Funding"]

    def test_analyze_text_output(self, chain_file, capsys):
        assert main(["analyze", chain_file]) == 0

        out = capsys.readouterr().out
        assert "INITIAL REACHABILITY MATRIX" in out
        assert "1*" in out
        assert "Funding -> Staffing" in out
        assert "Funding -> Quality" not in out
        assert "IV. Drivers: Funding (Dr 3, Dep 1)" in out
        assert "CYCLES" not in out

    def test_analyze_json_output(self, chain_file, capsys):
        assert main(["analyze", chain_file, "--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["element_ids"] == ["f1", "f2", "f3"]
        assert payload["micmac"]["split_point"] == 1.5

    def test_cycles_reported(self, tmp_path, capsys):
        path = tmp_path / "cycle.json"
        path.write_text(json.dumps({"factors": ["a", "b"], "relations": {"a": {"b": "X"}}}))

        assert main(["analyze", str(path)]) == 0
        assert "a <-> b" in capsys.readouterr().out

    def test_size_override_strict_fails(self, chain_file, capsys):
        assert main(["analyze", chain_file, "--size", "4"]) == 1
        assert "IDENTIFIER_MISMATCH" in capsys.readouterr().out

    def test_size_override_lenient_warns(self, chain_file, capsys):
        assert main(["analyze", chain_file, "--size", "4", "--lenient"]) == 0
        assert "[WARN]" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["levels", str(tmp_path / "absent.json")]) == 1
        assert "Failed to read" in capsys.readouterr().out

    def test_malformed_document(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"factors": "nope"}))

        assert main(["levels", str(path)]) == 1
        assert "MALFORMED_DOCUMENT" in capsys.readouterr().out

    def test_bad_environment_config_reported(self, chain_file, capsys, monkeypatch):
        monkeypatch.setenv("ISM_LEVEL_CAP_MARGIN", "-1")

        assert main(["analyze", chain_file]) == 1
        assert "[!] INVALID_INPUT" in capsys.readouterr().out

    def test_unrecognized_relation_in_document_reported(self, tmp_path, capsys):
        path = tmp_path / "bad_relation.json"
        path.write_text(json.dumps({"factors": ["a", "b"], "relations": {"a": {"b": "N"}}}))

        assert main(["levels", str(path)]) == 1
        assert "INVALID_RELATION" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


def test_render_matrix_marks_starred_cells():
    lines = render_matrix(((1, 1), (0, 1)), starred=[(0, 1)])
    assert lines[1].split() == ["1", "1", "1*"]
