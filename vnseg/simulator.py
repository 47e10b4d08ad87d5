"""
Deterministic simulator for the lexicon automaton.

The simulator walks a phrase one character at a time and splits it into
lexicon words by longest match. When the automaton gets stuck before the
end of the phrase, the scan backs up to the most recent plausible word
boundary (a preceding space), emits the word found so far and restarts
from the initial state on the rest of the phrase.
"""

import logging
from typing import Callable, List, Optional

from vnseg import settings
from vnseg.errors import ScanError
from vnseg.fsm import DFA, Configuration, ConfigurationEvent

logger = logging.getLogger(__name__)

SimulatorListener = Callable[[ConfigurationEvent], None]


class SimulatorLogger:
    """Listener that logs every configuration change of a simulator."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def __call__(self, event: ConfigurationEvent):
        self.log.debug(str(event))


class DFASimulator:
    """
    Simulator of a DFA. A deterministic simulator is at one and only one
    configuration at a time.

    Configurations of the current scan are kept in an arena; each one
    refers to its parent by index. The arena is emptied whenever the scan
    restarts from the initial state.
    """

    def __init__(self, dfa: DFA, trace: Optional[bool] = None):
        self.dfa = dfa
        self.word_list: List[str] = []
        self._chain: List[Configuration] = []
        self._listeners: List[SimulatorListener] = []
        if trace is None:
            trace = settings.DEBUG
        if trace:
            self.add_listener(SimulatorLogger())

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: SimulatorListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: SimulatorListener):
        self._listeners.remove(listener)

    def _notify(self, event: ConfigurationEvent):
        for listener in self._listeners:
            listener(event)

    # ------------------------------------------------------------------
    # Configuration chain
    # ------------------------------------------------------------------

    def _root(self, total_input: str, unprocessed_input: str) -> int:
        self._chain.clear()
        self._chain.append(
            Configuration(self.dfa.initial_state, None, total_input, unprocessed_input)
        )
        return 0

    def configuration(self, index: int) -> Configuration:
        return self._chain[index]

    def parent(self, index: Optional[int]) -> Optional[int]:
        """Index of the parent of a configuration, None for a root."""
        if index is None:
            return None
        return self._chain[index].parent

    def step(self, index: int) -> Optional[int]:
        """
        Consume one character of a configuration's unprocessed input.

        Args:
            index: Index of the current configuration.

        Returns:
            Index of the next configuration, or None if the simulator cannot
            go further.
        """
        configuration = self._chain[index]
        unprocessed = configuration.unprocessed_input
        if not unprocessed:
            return None
        char = unprocessed[0]
        state = configuration.state
        if char not in state.out_inputs():
            return None
        next_state = self.dfa.next_state(state, char)
        if next_state is None:
            return None

        next_configuration = Configuration(
            next_state, index, configuration.total_input, unprocessed[1:]
        )
        self._chain.append(next_configuration)
        if self._listeners:
            self._notify(ConfigurationEvent(configuration, next_configuration, char))
        return len(self._chain) - 1

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _recover(self, phrase: str, index: int) -> str:
        """
        Find the word that ends at the last word boundary before a failure.

        Args:
            phrase: The part of the input not yet split into words.
            index: Index of the configuration at which the automaton got stuck.

        Returns:
            The recovered word, stripped.
        """
        configuration = self._chain[index]
        unprocessed = configuration.unprocessed_input
        parent = self.parent(index)

        if unprocessed.startswith(' ') or (
            parent is not None and self._chain[parent].unprocessed_input.startswith(' ')
        ):
            # The match stopped right at a space
            end = phrase.find(unprocessed)
            if end == 0:
                # the same text repeats from the start: take the first copy only
                end = phrase.find(unprocessed, len(unprocessed))
                if end < 0:
                    # no later copy: cut at the suffix instead of failing the scan
                    end = len(phrase) - len(unprocessed)
            return phrase[:end].strip()

        # The match broke inside a syllable: back up to the previous space
        ancestor = self.parent(parent)
        while ancestor is not None and not self._chain[ancestor].unprocessed_input.startswith(' '):
            ancestor = self.parent(ancestor)

        if ancestor is not None:
            return phrase[:phrase.find(self._chain[ancestor].unprocessed_input)].strip()
        if ' ' not in phrase:
            # last word of the phrase
            return phrase
        return phrase[:phrase.find(' ')].strip()

    def track(self, text: str) -> Configuration:
        """
        Split an input into lexicon words.

        The resulting words are stored in `word_list`.

        Args:
            text: A lowercase phrase of syllables separated by single spaces.

        Returns:
            The configuration at which the machine cannot go further on the
            last word of the input.

        Raises:
            ScanError: If the input is blank or cannot be split.
        """
        if not text.strip():
            raise ScanError("Nothing to scan in a blank input")

        phrase = text.strip()
        terms: List[str] = []
        current = self._root(text, phrase)

        while True:
            next_index = self.step(current)
            if next_index is not None:
                current = next_index
                continue

            configuration = self._chain[current]
            if len(configuration.unprocessed_input) <= 1:
                # last word
                if phrase:
                    terms.append(phrase)
                self.word_list = terms
                return configuration

            term = self._recover(phrase, current)
            if not term:
                raise ScanError(f"Empty word recovered from {phrase!r}")
            terms.append(term)
            phrase = phrase[len(term):].strip()
            current = self._root(text, phrase)

    def accept(self, text: str) -> bool:
        """Track an input, reporting failure instead of raising."""
        try:
            self.track(text)
        except Exception as e:
            logger.debug(f"Scan of {text!r} failed: {e}")
            return False
        return True

    def dispose(self):
        self._chain.clear()
        self._listeners.clear()
        self.word_list = []
