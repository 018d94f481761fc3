"""
Unit tests for lemma_prove/prover.py, lemma_prove/lemmas.py, lemma_prove/receipts.py

Covers:
- Lemma selector validation
- Exclusion filter and contradiction filter counts
- Intersection across abiding completions
- Output formatting (1-indexed)
- Receipts: fields, stable fingerprint, saved JSON
"""

import json

import pytest

from lemma_core.errors import InvalidLemmaError
from lemma_core.types import Edge, normalize_equality
from lemma_graph.components import build_components_graph
from lemma_prove.lemmas import EXCLUDED_EQUALITIES, LEMMA_PATTERNS, get_lemma_pattern
from lemma_prove.prover import ProofResult, format_guaranteed, prove_pattern
from lemma_prove.receipts import build_receipt, save_receipt

EQ_01_21 = normalize_equality(Edge(0, 1), Edge(2, 1))
EQ_10_20 = normalize_equality(Edge(1, 0), Edge(2, 0))


class TestLemmas:

    @pytest.mark.parametrize("lemma", [1, 2])
    def test_known_lemmas(self, lemma):
        assert get_lemma_pattern(lemma) == LEMMA_PATTERNS[lemma]

    @pytest.mark.parametrize("lemma", [0, 3, -1, "1", None, [1]])
    def test_unknown_lemmas(self, lemma):
        with pytest.raises(InvalidLemmaError):
            get_lemma_pattern(lemma)

    def test_excluded_equalities(self):
        assert EXCLUDED_EQUALITIES == frozenset({
            normalize_equality(Edge(0, 1), Edge(2, 1)),
            normalize_equality(Edge(0, 1), Edge(4, 1)),
        })


class TestProvePattern:

    def test_excluded_candidate_never_counts(self):
        seen = []
        result = prove_pattern(("010", "101"), EXCLUDED_EQUALITIES, on_abiding=seen.append)

        assert result.candidates == 1
        assert result.excluded == 1
        assert result.abiding == 0
        assert result.guaranteed == ()
        assert seen == []

    def test_without_exclusions(self):
        result = prove_pattern(("010", "101"), frozenset())
        assert result.abiding == 1
        assert result.guaranteed == (EQ_01_21,)

    def test_contradiction_skipped(self):
        result = prove_pattern(("001", "010", "011", "100", "101", "110"), frozenset())
        assert result.contradictions == 1
        assert result.abiding == 0
        assert result.guaranteed == ()

    def test_intersection(self):
        """
        Template 010/101/?00/?11:
        - mask 0 (000/011): no extra forcing, equalities {01=21}
        - mask 1 (100/011): adds 10=20
        - mask 2 (000/111): equalities {01=21}
        - mask 3 (100/111): equalities {01=21}
        """
        template = ("010", "101", "?00", "?11")
        seen = []
        result = prove_pattern(template, frozenset(), on_abiding=seen.append)

        assert result.candidates == 4
        assert result.contradictions == 0
        assert result.abiding == 4
        assert seen == [1, 2, 3, 4]
        assert result.guaranteed == (EQ_01_21,)

    def test_matches_direct_fold(self):
        """Guaranteed set equals a direct intersection over abiding graphs."""
        pattern = LEMMA_PATTERNS[1]
        from lemma_core.pattern import expand_pattern

        common = None
        for m in expand_pattern(pattern):
            g = build_components_graph(m)
            if g.is_no_graph or (g.equalities & EXCLUDED_EQUALITIES):
                continue
            common = set(g.equalities) if common is None else common & g.equalities

        result = prove_pattern(pattern, EXCLUDED_EQUALITIES)
        assert set(result.guaranteed) == (common or set())
        assert list(result.guaranteed) == sorted(result.guaranteed)

    def test_counts_add_up(self):
        result = prove_pattern(LEMMA_PATTERNS[2], EXCLUDED_EQUALITIES)
        assert result.candidates == 256
        assert result.contradictions + result.excluded + result.abiding == 256


class TestFormatting:

    def test_format_guaranteed(self):
        result = ProofResult(
            guaranteed=(normalize_equality(Edge(4, 0), Edge(2, 0)),),
            candidates=1, contradictions=0, excluded=0, abiding=1,
        )
        assert format_guaranteed(result) == [
            "Guaranteed edge in formula graph: 3->1 = 5->1"
        ]

    def test_empty(self):
        result = ProofResult(guaranteed=(), candidates=0, contradictions=0, excluded=0, abiding=0)
        assert format_guaranteed(result) == []


class TestReceipts:

    def _result(self):
        return ProofResult(
            guaranteed=(EQ_01_21, EQ_10_20),
            candidates=4, contradictions=1, excluded=1, abiding=2,
        )

    def test_fields(self):
        receipt = build_receipt(1, self._result())
        assert receipt["lemma"] == 1
        assert receipt["candidates"] == 4
        assert receipt["contradictions"] == 1
        assert receipt["excluded"] == 1
        assert receipt["abiding"] == 2
        assert receipt["guaranteed"] == [
            "Guaranteed edge in formula graph: 1->2 = 3->2",
            "Guaranteed edge in formula graph: 2->1 = 3->1",
        ]
        assert "timestamp" in receipt

    def test_hash_stable_and_order_free(self):
        r1 = build_receipt(1, self._result())
        flipped = ProofResult(
            guaranteed=(EQ_10_20, EQ_01_21),
            candidates=4, contradictions=1, excluded=1, abiding=2,
        )
        r2 = build_receipt(1, flipped)
        assert r1["guaranteed_hash"] == r2["guaranteed_hash"]
        assert 0 <= r1["guaranteed_hash"] < 2 ** 64

    def test_save(self, tmp_path):
        receipt = build_receipt(2, self._result())
        path = save_receipt(receipt, tmp_path / "receipts")
        assert path == tmp_path / "receipts" / "lemma_2.json"
        with open(path) as f:
            assert json.load(f) == receipt
