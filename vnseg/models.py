"""
Pydantic models for vnseg results.

These models give a type-safe, JSON-serializable view of a segmentation,
used by the command line interface (`vnseg -f`).

Usage:
    from vnseg.models import SegmentationResult

    words = segmenter.tokenize("Hà Nội mùa thu")
    result = SegmentationResult.from_segmenter(segmenter, "Hà Nội mùa thu", words)
    print(result.model_dump_json())
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from vnseg.graph import WeightedGraph


class LatticeEdge(BaseModel):
    """An edge of the segmentation lattice."""
    start: int = Field(..., description="Position of the first syllable")
    end: int = Field(..., description="Position after the last syllable")
    weight: float = Field(..., description="Edge weight (lower is preferred)")
    word: str = Field(..., description="Syllables covered by the edge")


class SegmentationResult(BaseModel):
    """
    Segmentation of one phrase.

    Contains the chosen words, every candidate segmentation considered and,
    optionally, the repaired lattice.
    """
    phrase: str = Field(..., description="Phrase as given by the caller")
    words: List[str] = Field(..., description="Chosen segmentation")
    candidates: List[List[str]] = Field(default_factory=list, description="All candidate segmentations")
    ambiguous: bool = Field(False, description="Whether several candidates were found")
    lattice: Optional[List[LatticeEdge]] = Field(None, description="Lattice edges, if requested")

    @classmethod
    def from_segmenter(
        cls,
        segmenter,
        phrase: str,
        words: List[str],
        with_lattice: bool = False,
    ) -> "SegmentationResult":
        """
        Create a result from a segmenter after `tokenize(phrase)`.

        Args:
            segmenter: The Segmenter that produced `words`.
            phrase: The phrase that was tokenized.
            words: The segmentation returned by `tokenize`.
            with_lattice: If True, rebuild and include the repaired lattice.
        """
        lattice = None
        if with_lattice:
            syllables = [s.lower() for s in segmenter.normalize(phrase).split()]
            graph = segmenter.build_lattice(syllables)
            segmenter.connect(graph)
            lattice = lattice_edges(graph, syllables)
        return cls(
            phrase=phrase,
            words=list(words),
            candidates=[list(c) for c in segmenter.result],
            ambiguous=len(segmenter.result) > 1,
            lattice=lattice,
        )


def lattice_edges(graph: WeightedGraph, syllables: List[str]) -> List[LatticeEdge]:
    """Convert the edges of a lattice into models, ordered by position."""
    return [
        LatticeEdge(start=e.u, end=e.v, weight=e.weight, word=" ".join(syllables[e.u:e.v]))
        for e in sorted(graph.edges(), key=lambda e: (e.u, e.v))
    ]
