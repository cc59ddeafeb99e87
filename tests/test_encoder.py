"""
Relation Encoder Tests
======================

SSIM judgments -> Initial Reachability Matrix.
"""

import pytest

from ism_engine.contracts.base import ErrorCode, InvalidInputError
from ism_engine.contracts.relations import Relation, RelationLookup
from ism_engine.core.encoder import convert_ssim_to_irm


class TestRelationParsing:

    @pytest.mark.parametrize("raw,expected", [
        ("V", Relation.V),
        ("a", Relation.A),
        (" x ", Relation.X),
        ("O", Relation.O),
        (None, Relation.O),
        ("", Relation.O),
        (Relation.X, Relation.X),
    ])
    def test_parse_accepts_known_values(self, raw, expected):
        assert Relation.parse(raw) == expected

    @pytest.mark.parametrize("raw", ["Z", "VA", 1])
    def test_parse_rejects_unknown_values(self, raw):
        with pytest.raises(InvalidInputError) as exc:
            Relation.parse(raw)
        assert exc.value.code == ErrorCode.INVALID_RELATION

    def test_direction_cells(self):
        assert (Relation.V.forward, Relation.V.backward) == (1, 0)
        assert (Relation.A.forward, Relation.A.backward) == (0, 1)
        assert (Relation.X.forward, Relation.X.backward) == (1, 1)
        assert (Relation.O.forward, Relation.O.backward) == (0, 0)


class TestRelationLookup:

    def test_absent_entries_default_to_o(self):
        """Missing row, missing column and missing identifier all resolve to O."""
        lookup = RelationLookup(["a", "b", "c"], {"a": {"b": "V"}})

        assert lookup(0, 1) == Relation.V
        assert lookup(0, 2) == Relation.O
        assert lookup(1, 2) == Relation.O
        assert lookup(1, 5) == Relation.O

    def test_none_ssim_is_empty(self):
        lookup = RelationLookup(["a", "b"], None)
        assert lookup.lookup(0, 1) == Relation.O

    @pytest.mark.parametrize("raw", ["N", "?", "v", " X ", "", 1, ["V"]])
    def test_unrecognized_values_resolve_to_o(self, raw):
        """Only exact V, A, X, O count; anything else is read as O and kept aside."""
        lookup = RelationLookup(["a", "b"], {"a": {"b": raw}})

        assert lookup(0, 1) == Relation.O
        assert len(lookup.unresolved) == 1
        assert lookup.unresolved[0].raw == raw
        assert "treated as O" in lookup.unresolved[0].describe(lookup.ids)

    def test_recognized_values_not_reported(self):
        lookup = RelationLookup(["a", "b", "c"], {"a": {"b": "X", "c": Relation.A}})

        assert lookup(0, 1) == Relation.X
        assert lookup(0, 2) == Relation.A
        assert lookup.unresolved == ()

    def test_non_mapping_row_resolves_to_o(self):
        lookup = RelationLookup(["a", "b"], {"a": "V"})
        assert lookup(0, 1) == Relation.O


class TestConvertSsimToIrm:

    def test_each_judgment_sets_expected_cells(self):
        ids = ["a", "b", "c", "d"]
        ssim = {
            "a": {"b": "V", "c": "A", "d": "X"},
            "b": {"c": "O"},
        }

        irm = convert_ssim_to_irm(4, ids, ssim)

        assert irm == (
            (1, 1, 0, 1),
            (0, 1, 0, 0),
            (1, 0, 1, 0),
            (1, 0, 0, 1),
        )

    def test_diagonal_is_always_one(self):
        irm = convert_ssim_to_irm(3, ["a", "b", "c"], {})
        assert all(irm[i][i] == 1 for i in range(3))

    def test_lower_triangle_entries_are_ignored(self):
        """Only ssim[ids[i]][ids[j]] with i < j is consulted."""
        irm = convert_ssim_to_irm(2, ["a", "b"], {"b": {"a": "V"}})
        assert irm == ((1, 0), (0, 1))

    def test_empty_model(self):
        assert convert_ssim_to_irm(0, [], {}) == ()

    def test_short_identifier_list_resolves_to_o(self):
        irm = convert_ssim_to_irm(3, ["a", "b"], {"a": {"b": "V"}})
        assert irm == ((1, 1, 0), (0, 1, 0), (0, 0, 1))

    def test_unrecognized_judgment_encodes_as_o(self):
        """Unknown values never fail the encoder; they give no edge either way."""
        lookup = RelationLookup(["a", "b", "c"], {"a": {"b": "N", "c": "v"}})

        irm = convert_ssim_to_irm(3, ["a", "b", "c"], None, lookup=lookup)

        assert irm == ((1, 0, 0), (0, 1, 0), (0, 0, 1))
        assert [(u.i, u.j) for u in lookup.unresolved] == [(0, 1), (0, 2)]

    def test_negative_size_rejected(self):
        with pytest.raises(InvalidInputError) as exc:
            convert_ssim_to_irm(-1, [], {})
        assert exc.value.code == ErrorCode.INVALID_INPUT

    def test_input_mapping_untouched(self):
        ssim = {"a": {"b": "V"}}
        convert_ssim_to_irm(2, ["a", "b"], ssim)
        assert ssim == {"a": {"b": "V"}}
