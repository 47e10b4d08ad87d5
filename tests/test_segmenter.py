"""
Tests for segmenter.py - normalization, lattice repair and tokenization.
"""

import logging
from unittest.mock import patch

import pytest

from vnseg.errors import RecognizerDisposedError, SegmenterError
from vnseg.graph import Edge, WeightedGraph
from vnseg.recognizer import DFALexiconRecognizer, ExternalLexiconRecognizer
from vnseg.resolver import ShortestPathResolver
from vnseg.segmenter import Segmenter
from vnseg.settings import MAX_EDGE_WEIGHT


def _edges(graph):
    return sorted((e.u, e.v, e.weight) for e in graph.edges())


# =============================================================================
# Normalization
# =============================================================================


class TestNormalize:

    def test_ascii_first_letter(self, segmenter):
        assert segmenter.normalize("Viet nam") == "viet nam"

    def test_vietnamese_first_letter(self, segmenter):
        assert segmenter.normalize("Đà Nẵng") == "đà Nẵng"
        assert segmenter.normalize("Ánh sáng") == "ánh sáng"

    def test_accents(self, segmenter):
        assert segmenter.normalize("Hòa bình") == "hoà bình"
        assert segmenter.normalize("thủy lợi") == "thuỷ lợi"

    def test_only_first_character(self, segmenter):
        assert segmenter.normalize("Hà Nội") == "hà Nội"

    def test_empty_phrase_rejected(self, segmenter):
        with pytest.raises(ValueError):
            segmenter.normalize("")

    def test_prepare_splits_syllables(self, segmenter):
        segmenter.result.append(["stale"])
        assert segmenter.prepare("Mùa  thu\tHà Nội") == ["mùa", "thu", "Hà", "Nội"]
        assert segmenter.result == []


# =============================================================================
# Segment
# =============================================================================


class TestSegment:

    def test_compound(self, segmenter):
        assert segmenter.segment("Viet Nam") == ["viet nam"]

    def test_per_syllable_fallback(self, segmenter):
        assert segmenter.segment("hoa hoc") == ["hoa", "hoc"]

    def test_rejected(self, segmenter):
        assert segmenter.segment("   ") is None


# =============================================================================
# Lattice repair
# =============================================================================


class TestConnect:

    def test_no_edges(self, segmenter):
        graph = WeightedGraph(4)
        assert segmenter.connect(graph)
        assert _edges(graph) == [
            (0, 1, MAX_EDGE_WEIGHT),
            (1, 2, MAX_EDGE_WEIGHT),
            (2, 3, MAX_EDGE_WEIGHT),
        ]
        assert graph.count_components() == 1

    def test_connected_graph_unchanged(self, segmenter):
        graph = WeightedGraph(3)
        graph.insert(Edge(0, 2, 1.0))
        graph.insert(Edge(0, 1, 1.0))
        before = _edges(graph)
        assert segmenter.connect(graph)
        assert _edges(graph) == before

    def test_edge_zero_one_added_even_with_out_edges(self, segmenter):
        graph = WeightedGraph(4)
        graph.insert(Edge(0, 2, 1.0))
        assert segmenter.connect(graph)
        assert _edges(graph) == [
            (0, 1, MAX_EDGE_WEIGHT),
            (0, 2, 1.0),
            (2, 3, MAX_EDGE_WEIGHT),
        ]

    def test_overlapping_compounds(self, segmenter):
        graph = WeightedGraph(4)
        graph.insert(Edge(0, 2, 1.0))
        graph.insert(Edge(1, 3, 1.0))
        assert segmenter.connect(graph)
        # vertex 1 is isolated but (0, 1) was already added for vertex 0
        assert _edges(graph) == [
            (0, 1, MAX_EDGE_WEIGHT),
            (0, 2, 1.0),
            (1, 3, 1.0),
        ]

    def test_custom_max_weight(self, recognizer):
        segmenter = Segmenter(recognizer, max_edge_weight=7.0)
        graph = WeightedGraph(2)
        segmenter.connect(graph)
        assert _edges(graph) == [(0, 1, 7.0)]

    def test_failure_is_logged(self, segmenter, caplog):
        graph = WeightedGraph(3)
        with patch.object(WeightedGraph, "count_components", return_value=2):
            with caplog.at_level(logging.WARNING, logger="vnseg.segmenter"):
                assert segmenter.connect(graph) is False
        assert "Failed to connect" in caplog.text


class TestBuildLattice:

    def test_compound_edges(self, segmenter):
        graph = segmenter.build_lattice(["hoc", "sinh", "vien"])
        assert _edges(graph) == [(0, 2, 1.0), (1, 3, 1.0)]

    def test_no_compound(self, segmenter):
        graph = segmenter.build_lattice(["hoa", "hoc"])
        assert graph.edges() == []
        assert segmenter.connect(graph)
        assert graph.shortest_path(0, 2) == [0, 1, 2]

    def test_span_limit(self, recognizer):
        segmenter = Segmenter(recognizer, max_word_syllables=1)
        assert segmenter.build_lattice(["viet", "nam"]).edges() == []

    def test_external_lexicon(self, recognizer):
        segmenter = Segmenter(
            recognizer, external_recognizer=ExternalLexiconRecognizer(["hoa hoc"])
        )
        assert _edges(segmenter.build_lattice(["hoa", "hoc"])) == [(0, 2, 1.0)]


# =============================================================================
# Tokenize
# =============================================================================


class TestTokenize:

    def test_compound(self, segmenter):
        assert segmenter.tokenize("Viet nam") == ["viet nam"]
        assert segmenter.result == [["viet nam"]]

    def test_unknown_compound(self, segmenter):
        assert segmenter.tokenize("hoa hoc") == ["hoa", "hoc"]
        assert len(segmenter.result) == 1

    def test_ambiguous_phrase(self, segmenter):
        words = segmenter.tokenize("Hoc sinh vien")
        assert segmenter.result == [["hoc sinh", "vien"], ["hoc", "sinh vien"]]
        assert words == ["hoc sinh", "vien"]

    def test_vietnamese_phrase(self, segmenter):
        assert segmenter.tokenize("Hà Nội mùa thu") == ["hà nội", "mùa thu"]

    def test_external_compound_wins(self, recognizer):
        segmenter = Segmenter(
            recognizer,
            resolver=ShortestPathResolver(),
            external_recognizer=ExternalLexiconRecognizer(["hoa hoc"]),
        )
        assert segmenter.tokenize("hoa hoc") == ["hoa hoc"]
        assert segmenter.result == [["hoa", "hoc"], ["hoa hoc"]]

    def test_unknown_tail_split_into_syllables(self, segmenter):
        assert segmenter.tokenize("viet namz") == ["viet", "namz"]
        assert segmenter.result == [["viet namz"], ["viet", "namz"]]

    def test_scan_remainder_not_in_lexicon(self):
        from conftest import build_dfa

        recognizer = DFALexiconRecognizer(build_dfa(["hoa", "hoc", "hoa hoa"]))
        segmenter = Segmenter(recognizer, resolver=ShortestPathResolver())
        assert segmenter.tokenize("hoa hoc") == ["hoa", "hoc"]
        assert segmenter.result == [["hoa hoc"], ["hoa", "hoc"]]

    def test_without_resolver_first_candidate(self, recognizer):
        segmenter = Segmenter(recognizer)
        assert segmenter.tokenize("hoc sinh vien") == ["hoc sinh", "vien"]

    def test_unaccepted_phrase_falls_back_to_lattice(self, segmenter):
        with patch.object(segmenter.recognizer, "accept", return_value=False):
            assert segmenter.tokenize("hoa hoc") == ["hoa", "hoc"]

    def test_empty_phrase(self, segmenter):
        with pytest.raises(ValueError):
            segmenter.tokenize("")

    def test_blank_phrase(self, segmenter):
        assert segmenter.tokenize("   ") == []


class TestResolveAndDispose:

    def test_resolve_ambiguity(self, segmenter):
        assert segmenter.resolve_ambiguity([["hoc", "sinh"], ["hoc sinh"]]) == ["hoc sinh"]

    def test_resolve_rejects_unknown_compound(self, segmenter):
        assert segmenter.resolve_ambiguity([["hoa", "hoc"], ["hoa hoc"]]) == ["hoa", "hoc"]

    def test_resolve_without_resolver(self, recognizer):
        with pytest.raises(SegmenterError):
            Segmenter(recognizer).resolve_ambiguity([["hoa"]])

    def test_resolve_nothing(self, segmenter):
        with pytest.raises(SegmenterError):
            segmenter.resolve_ambiguity([])

    def test_format_result(self, segmenter, capsys):
        segmenter.tokenize("hoc sinh vien")
        assert segmenter.format_result() == "[hoc sinh] [vien]\n[hoc] [sinh vien]"
        segmenter.print_result()
        assert "[sinh vien]" in capsys.readouterr().out

    def test_dispose(self, recognizer):
        external = ExternalLexiconRecognizer(["hoa hoc"])
        segmenter = Segmenter(recognizer, external_recognizer=external)
        segmenter.tokenize("hoa hoc")
        segmenter.dispose()
        assert segmenter.result == []
        assert external.words == set()
        with pytest.raises(RecognizerDisposedError):
            segmenter.segment("hoa")


class TestFromSettings:

    def test_builds_on_shared_recognizer(self, dfa_path, tmp_path):
        from conftest import write_lexicon_xml
        from vnseg.recognizer import clear_recognizers, get_recognizer

        user = write_lexicon_xml(["hoa hoc"], tmp_path / "user.xml")
        try:
            segmenter = Segmenter.from_settings(dfa_path, user)
            assert segmenter.recognizer is get_recognizer(dfa_path)
            assert isinstance(segmenter.resolver, ShortestPathResolver)
            assert segmenter.tokenize("hoa hoc") == ["hoa hoc"]
        finally:
            clear_recognizers()
