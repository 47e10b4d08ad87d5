"""
Ambiguity resolvers for vnseg.

A resolver picks the preferred segmentation among the candidates found
for a phrase.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from vnseg.graph import Edge, WeightedGraph
from vnseg.settings import DEFAULT_EDGE_WEIGHT, MAX_EDGE_WEIGHT

Segmentation = List[str]
WordPredicate = Callable[[str], bool]


class AbstractResolver(ABC):

    @abstractmethod
    def resolve(
        self,
        segmentations: Sequence[Segmentation],
        is_word: Optional[WordPredicate] = None,
    ) -> Segmentation:
        """
        Return the most probable segmentation.

        Args:
            segmentations: Candidate segmentations of one phrase.
            is_word: Lexicon membership test. When given, words it rejects
                are not preferred over their syllables.
        """


class ShortestPathResolver(AbstractResolver):
    """
    Resolver that merges all candidates into one lattice and returns the
    lowest-weight path through it.

    Known words of several syllables are weighted `default_weight`; single
    syllables get `max_weight`, so the path prefers longer known words.
    A multi-syllable word rejected by the lexicon is split into its
    syllables.
    """

    def __init__(
        self,
        default_weight: float = DEFAULT_EDGE_WEIGHT,
        max_weight: float = MAX_EDGE_WEIGHT,
    ):
        self.default_weight = default_weight
        self.max_weight = max_weight

    def _insert(self, graph: WeightedGraph, u: int, v: int, weight: float):
        if not graph.has_edge(u, v):
            graph.insert(Edge(u, v, weight))

    def build_graph(
        self,
        segmentations: Sequence[Segmentation],
        is_word: Optional[WordPredicate] = None,
    ):
        """
        Build the union lattice of the candidates.

        Returns:
            Tuple of (graph, syllables).

        Raises:
            ValueError: If there are no candidates or they cover different
                syllables.
        """
        if not segmentations:
            raise ValueError("No segmentation to resolve")
        syllables = " ".join(segmentations[0]).split()
        graph = WeightedGraph(len(syllables) + 1)

        for segmentation in segmentations:
            if " ".join(segmentation).split() != syllables:
                raise ValueError(
                    f"Segmentation {segmentation} does not cover {' '.join(syllables)!r}"
                )
            position = 0
            for word in segmentation:
                size = len(word.split())
                if size == 1:
                    self._insert(graph, position, position + 1, self.max_weight)
                elif is_word is None or is_word(word):
                    self._insert(graph, position, position + size, self.default_weight)
                else:
                    for i in range(position, position + size):
                        self._insert(graph, i, i + 1, self.max_weight)
                position += size
        return graph, syllables

    def resolve(
        self,
        segmentations: Sequence[Segmentation],
        is_word: Optional[WordPredicate] = None,
    ) -> Segmentation:
        graph, syllables = self.build_graph(segmentations, is_word)
        path = graph.shortest_path(0, len(syllables))
        # every candidate is a path from 0 to N, so one always exists
        return [" ".join(syllables[u:v]) for u, v in zip(path, path[1:])]
