"""
Exceptions raised by vnseg.
"""


class VnsegError(Exception):
    """Base class for all vnseg errors."""


class LexiconLoadError(VnsegError):
    """Raised when a lexicon automaton or word list cannot be loaded."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot load lexicon '{self.path}': {reason}")


class ScanError(VnsegError):
    """Raised inside a scan when the input cannot be split into words."""


class AutomatonDisposedError(VnsegError):
    """Raised when a disposed automaton is used."""


class RecognizerDisposedError(VnsegError):
    """Raised when a disposed recognizer is used."""


class SegmenterError(VnsegError):
    """Raised when the segmenter cannot resolve an ambiguity."""
