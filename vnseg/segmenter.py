"""
Segmenter of Vietnamese.

Splits a chain of Vietnamese syllables (a phrase) into words. Before
segmenting, the phrase is normalized:

- if its first character is uppercase it is changed to lowercase;
- accents are moved to their canonical place (hòa -> hoà).

The lexicon automaton gives one segmentation by longest match. A lattice
of all known multi-syllable words over the syllable positions gives
another; when they disagree the resolver picks one.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from vnseg import settings
from vnseg.characters import AccentNormalizer, lower_first
from vnseg.errors import SegmenterError
from vnseg.graph import Edge, WeightedGraph
from vnseg.recognizer import (
    ExternalLexiconRecognizer,
    LexiconRecognizer,
    get_recognizer,
)
from vnseg.resolver import AbstractResolver, ShortestPathResolver

logger = logging.getLogger(__name__)


class Segmenter:
    """
    Word segmenter driven by a lexicon recognizer.

    The recognizer (and optional external recognizer) are owned by the
    caller and shared; `dispose()` releases them.
    """

    def __init__(
        self,
        recognizer: LexiconRecognizer,
        resolver: Optional[AbstractResolver] = None,
        external_recognizer: Optional[LexiconRecognizer] = None,
        normalizer: Optional[AccentNormalizer] = None,
        max_edge_weight: float = settings.MAX_EDGE_WEIGHT,
        max_word_syllables: int = settings.MAX_WORD_SYLLABLES,
    ):
        self.recognizer = recognizer
        self.resolver = resolver
        self.external_recognizer = external_recognizer
        self.normalizer = normalizer or AccentNormalizer()
        self.max_edge_weight = max_edge_weight
        self.max_word_syllables = max_word_syllables
        # Each possible segmentation of the last phrase, as a list of words
        self.result: List[List[str]] = []

    @classmethod
    def from_settings(
        cls,
        dfa_path: Optional[Union[str, Path]] = None,
        external_path: Optional[Union[str, Path]] = None,
        resolver: Optional[AbstractResolver] = None,
    ) -> "Segmenter":
        """Build a segmenter on the shared recognizer for a lexicon file."""
        external_path = external_path or settings.EXTERNAL_LEXICON_PATH
        external = ExternalLexiconRecognizer.from_file(external_path) if external_path else None
        return cls(
            get_recognizer(dfa_path),
            resolver=resolver or ShortestPathResolver(max_weight=settings.MAX_EDGE_WEIGHT),
            external_recognizer=external,
        )

    # ------------------------------------------------------------------
    # Preprocessing
    # ------------------------------------------------------------------

    def normalize(self, phrase: str) -> str:
        """
        Lowercase the first character of a phrase and normalize its accents.

        Raises:
            ValueError: If the phrase is empty.
        """
        return self.normalizer.normalize(lower_first(phrase))

    def prepare(self, phrase: str) -> List[str]:
        """Clear the last result and split a normalized phrase into syllables."""
        self.result.clear()
        return self.normalize(phrase).split()

    # ------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------

    def segment(self, phrase: str) -> Optional[List[str]]:
        """
        Segment a phrase by longest match on the lexicon automaton.

        Returns:
            The words of the phrase, or None if the recognizer rejects it.
        """
        if self.recognizer.accept(phrase.lower().strip()):
            return list(self.recognizer.word_list)
        return None

    def is_word(self, word: str) -> bool:
        """True if either lexicon holds the word."""
        if self.recognizer.contains(word):
            return True
        return self.external_recognizer is not None and self.external_recognizer.contains(word)

    def build_lattice(self, syllables: List[str]) -> WeightedGraph:
        """
        Build the lattice of known multi-syllable words of a phrase.

        Vertex i is the position before syllable i; an edge (i, j) means that
        syllables i..j-1 form a lexicon word.
        """
        n = len(syllables)
        graph = WeightedGraph(n + 1)
        for i in range(n):
            for j in range(i + 2, min(n, i + self.max_word_syllables) + 1):
                if self.is_word(" ".join(syllables[i:j])):
                    graph.insert(Edge(i, j, settings.DEFAULT_EDGE_WEIGHT))
        return graph

    def connect(self, graph: WeightedGraph) -> bool:
        """
        Try to connect an unconnected lattice.

        Every isolated vertex (one without any incoming edge) gets an edge
        from its predecessor with the maximum weight, so the lattice always
        holds at least the one-syllable-per-word path.

        Returns:
            True if the lattice has a single component afterwards.
        """
        if graph.count_components() == 1:
            return True

        isolated = graph.isolated_vertices()
        logger.debug(f"Isolated vertices of {graph}: {isolated}")

        # Vertex 0 is always isolated since nothing enters the first position.
        # Edge (0, 1) is added whether or not vertex 0 already has out edges.
        zero_vertex = False
        for u in isolated:
            if u == 0:
                zero_vertex = True
                graph.insert(Edge(0, 1, self.max_edge_weight))
            elif u != 1 or not zero_vertex:
                graph.insert(Edge(u - 1, u, self.max_edge_weight))

        if graph.count_components() != 1:
            logger.warning(f"Failed to connect the lattice {graph}")
            return False
        return True

    def tokenize(self, phrase: str) -> List[str]:
        """
        Segment a phrase into its most probable words.

        All distinct candidates are kept in `result`.

        Raises:
            ValueError: If the phrase is empty.
        """
        syllables = [s.lower() for s in self.prepare(phrase)]
        if not syllables:
            return []

        scanned = self.segment(" ".join(syllables))
        if scanned:
            self.result.append(scanned)

        lattice = self.build_lattice(syllables)
        self.connect(lattice)
        path = lattice.shortest_path(0, len(syllables))
        if path is None:
            logger.warning(f"No path through the lattice of {phrase!r}")
        else:
            words = [" ".join(syllables[u:v]) for u, v in zip(path, path[1:])]
            if words not in self.result:
                self.result.append(words)

        if not self.result:
            return syllables
        if len(self.result) == 1 or self.resolver is None:
            return self.result[0]
        return self.resolve_ambiguity(self.result)

    def resolve_ambiguity(self, segmentations: List[List[str]]) -> List[str]:
        """
        Args:
            segmentations: A list of possible segmentations.

        Returns:
            The most probable segmentation.
        """
        if self.resolver is None:
            raise SegmenterError("No ambiguity resolver configured")
        if not segmentations:
            raise SegmenterError("No segmentation to resolve")
        return self.resolver.resolve(segmentations, self.is_word)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def format_result(self) -> str:
        return "\n".join(
            " ".join(f"[{word}]" for word in segmentation)
            for segmentation in self.result
        )

    def print_result(self):
        print(self.format_result())

    def dispose(self):
        """Dispose the segmenter to save space."""
        self.result.clear()
        self.recognizer.dispose()
        if self.external_recognizer is not None:
            self.external_recognizer.dispose()
