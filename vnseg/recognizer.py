"""
Lexicon recognizers for vnseg.

A recognizer accepts a phrase and exposes the list of lexicon words found
by the last successful scan. Two implementations are provided:

- DFALexiconRecognizer: scans with the precompiled lexicon automaton.
- ExternalLexiconRecognizer: looks words up in a user word list.

Recognizers are built once and reused. `get_recognizer` keeps one
automaton recognizer per lexicon file for the whole process; it is not
safe to share a recognizer between threads without `LockedRecognizer`.
"""

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from vnseg.errors import RecognizerDisposedError
from vnseg.fsm import DFA
from vnseg.fsm_load import load_dfa, load_lexicon
from vnseg.settings import LEXICON_DFA_PATH
from vnseg.simulator import DFASimulator

logger = logging.getLogger(__name__)


class LexiconRecognizer(ABC):
    """Interface of a lexicon recognizer."""

    @abstractmethod
    def accept(self, token: str) -> bool:
        """Scan a token, updating `word_list` on success."""

    @abstractmethod
    def contains(self, word: str) -> bool:
        """Check whether a word is in the lexicon."""

    @property
    @abstractmethod
    def word_list(self) -> List[str]:
        """Words produced by the last successful `accept`."""

    def get_word_list(self) -> List[str]:
        return self.word_list

    def dispose(self):
        """Release the resources held by the recognizer."""


# ============================================================================
# Automaton Recognizer
# ============================================================================

class DFALexiconRecognizer(LexiconRecognizer):
    """A recognizer for the Vietnamese lexicon that uses an internal DFA."""

    def __init__(self, dfa: DFA):
        self.dfa = dfa
        self._simulator: Optional[DFASimulator] = None
        self._word_list: List[str] = []
        self._disposed = False

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]] = None) -> "DFALexiconRecognizer":
        """Build a recognizer from an automaton file; load errors propagate."""
        return cls(load_dfa(path))

    @property
    def simulator(self) -> DFASimulator:
        self._check()
        if self._simulator is None:
            self._simulator = DFASimulator(self.dfa)
        return self._simulator

    def accept(self, token: str) -> bool:
        simulator = self.simulator
        accepted = simulator.accept(token)
        self._word_list = simulator.word_list
        return accepted

    def contains(self, word: str) -> bool:
        self._check()
        return self.dfa.recognizes(word)

    @property
    def word_list(self) -> List[str]:
        return self._word_list

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self):
        if self._simulator is not None:
            self._simulator.dispose()
            self._simulator = None
        self.dfa.dispose()
        self._word_list = []
        self._disposed = True

    def _check(self):
        if self._disposed:
            raise RecognizerDisposedError("Lexicon recognizer has been disposed")


# ============================================================================
# External (User) Lexicon Recognizer
# ============================================================================

class ExternalLexiconRecognizer(LexiconRecognizer):
    """
    Recognizer backed by a plain set of words, used for user lexicons.

    `accept` succeeds only when the whole token is a known word.
    """

    def __init__(self, words: Iterable[str] = ()):
        self.words = {w.strip().lower() for w in words if w.strip()}
        self._word_list: List[str] = []

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ExternalLexiconRecognizer":
        return cls(load_lexicon(path))

    def accept(self, token: str) -> bool:
        token = token.strip().lower()
        if token in self.words:
            self._word_list = [token]
            return True
        return False

    def contains(self, word: str) -> bool:
        return word.strip().lower() in self.words

    @property
    def word_list(self) -> List[str]:
        return self._word_list

    def dispose(self):
        self.words.clear()
        self._word_list = []


# ============================================================================
# Exclusive Access
# ============================================================================

class LockedRecognizer(LexiconRecognizer):
    """Serializes access to a recognizer shared between threads."""

    def __init__(self, inner: LexiconRecognizer):
        self.inner = inner
        self._lock = threading.RLock()

    def accept(self, token: str) -> bool:
        with self._lock:
            return self.inner.accept(token)

    def accept_words(self, token: str) -> Optional[List[str]]:
        """Scan a token and return its words in one locked operation."""
        with self._lock:
            if self.inner.accept(token):
                return list(self.inner.word_list)
            return None

    def contains(self, word: str) -> bool:
        with self._lock:
            return self.inner.contains(word)

    @property
    def word_list(self) -> List[str]:
        with self._lock:
            return list(self.inner.word_list)

    def dispose(self):
        with self._lock:
            self.inner.dispose()


# ============================================================================
# Shared Instances
# ============================================================================

_RECOGNIZERS: Dict[str, DFALexiconRecognizer] = {}
_lock = threading.Lock()


def get_recognizer(path: Optional[Union[str, Path]] = None) -> DFALexiconRecognizer:
    """
    Get the shared recognizer for an automaton file, loading it on first use.

    Args:
        path: Path to the automaton file. Defaults to settings.LEXICON_DFA_PATH.

    Returns:
        The recognizer bound to that file.
    """
    key = str(Path(path or LEXICON_DFA_PATH).resolve())
    with _lock:
        recognizer = _RECOGNIZERS.get(key)
        if recognizer is None or recognizer.disposed:
            recognizer = DFALexiconRecognizer.from_file(key)
            _RECOGNIZERS[key] = recognizer
        return recognizer


def clear_recognizers():
    """Dispose and forget all shared recognizers."""
    with _lock:
        for recognizer in _RECOGNIZERS.values():
            recognizer.dispose()
        _RECOGNIZERS.clear()
