"""
vnseg: Vietnamese word segmentation with a lexicon automaton.
"""

from typing import List, Optional

__version__ = "0.1.0"


def tokenize(text: str, segmenter=None, dfa_path: Optional[str] = None) -> List[str]:
    """
    Segment Vietnamese text into words.

    This is the main high-level API.

    Args:
        text: Phrase to segment.
        segmenter: Optional Segmenter. If None, one is built on the shared
            recognizer for `dfa_path` (settings.LEXICON_DFA_PATH by default).
        dfa_path: Lexicon automaton file, used only when segmenter is None.

    Returns:
        List of words.

    Example:
        >>> import vnseg
        >>> vnseg.tokenize("Học sinh viên")
        ['học sinh', 'viên']
    """
    from vnseg.segmenter import Segmenter

    if segmenter is None:
        segmenter = Segmenter.from_settings(dfa_path)
    return segmenter.tokenize(text)
