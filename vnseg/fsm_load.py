"""
Lexicon loading module for vnseg.

Reads the precompiled lexicon automaton and plain word lexicons from XML
files (gzipped or plain).

Automaton format:

    <fsm type="dfa">
      <states>
        <s id="0" initial="true"/>
        <s id="1"/>
        <s id="2" final="true"/>
      </states>
      <transitions>
        <t src="0" dst="1" inp="o"/>
        <t src="1" dst="2" inp="i"/>
      </transitions>
    </fsm>

Word lexicon format:

    <corpus><body><w>việt nam</w><w>hà nội</w></body></corpus>
"""

import gzip
import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import IO, List, Optional, Union

from vnseg.errors import LexiconLoadError
from vnseg.fsm import DFA
from vnseg.settings import LEXICON_DFA_PATH

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_TRUE_VALUES = ("1", "true", "yes")


def is_gzip_file(path: str) -> bool:
    """Check if a file is gzip compressed by reading magic bytes."""
    try:
        with open(path, 'rb') as f:
            return f.read(2) == b'\x1f\x8b'
    except OSError:
        return False


def _resolve(path: PathLike) -> str:
    path = str(path)
    # Also check for .gz version
    if not os.path.exists(path) and os.path.exists(path + '.gz'):
        path = path + '.gz'
    if not os.path.exists(path):
        raise FileNotFoundError(f"Lexicon not found at: {path}")
    return path


def _open(path: str) -> IO[bytes]:
    if path.endswith('.gz') or is_gzip_file(path):
        return gzip.open(path, 'rb')
    return open(path, 'rb')


def _flag(elem: ET.Element, name: str) -> bool:
    return elem.get(name, '').lower() in _TRUE_VALUES


def _int_attr(elem: ET.Element, name: str, path: str) -> int:
    value = elem.get(name)
    if value is None:
        raise LexiconLoadError(path, f"<{elem.tag}> without '{name}' attribute")
    try:
        return int(value)
    except ValueError:
        raise LexiconLoadError(path, f"<{elem.tag}> has non-integer {name}={value!r}")


# ============================================================================
# Automaton
# ============================================================================

def load_dfa(path: Optional[PathLike] = None) -> DFA:
    """
    Load a lexicon automaton from an XML file.

    Args:
        path: Path to the automaton file. Defaults to settings.LEXICON_DFA_PATH.

    Returns:
        The loaded DFA.

    Raises:
        FileNotFoundError: If the file does not exist.
        LexiconLoadError: If the file is not a well-formed automaton.
    """
    path = _resolve(path or LEXICON_DFA_PATH)
    logger.info(f"Loading lexicon automaton from {path}")

    dfa = DFA()
    n_transitions = 0
    f = _open(path)
    try:
        # Use iterparse for memory efficiency
        for _, elem in ET.iterparse(f, events=('end',)):
            if elem.tag == 's':
                dfa.add_state(
                    _int_attr(elem, 'id', path),
                    final=_flag(elem, 'final'),
                    initial=_flag(elem, 'initial'),
                )
                elem.clear()
            elif elem.tag == 't':
                src = _int_attr(elem, 'src', path)
                dst = _int_attr(elem, 'dst', path)
                dfa.add_transition(src, elem.get('inp', ''), dst)
                n_transitions += 1
                elem.clear()
            elif elem.tag == 'fsm':
                fsm_type = elem.get('type', 'dfa').lower()
                if fsm_type != 'dfa':
                    raise LexiconLoadError(path, f"unsupported automaton type {fsm_type!r}")
    except ET.ParseError as e:
        raise LexiconLoadError(path, f"malformed XML: {e}")
    except ValueError as e:
        raise LexiconLoadError(path, str(e))
    finally:
        f.close()

    try:
        dfa.initial_state
    except ValueError:
        raise LexiconLoadError(path, "no initial state")

    logger.info(f"Loaded {len(dfa)} states and {n_transitions} transitions")
    return dfa


# ============================================================================
# Word Lexicon
# ============================================================================

def load_lexicon(path: PathLike) -> List[str]:
    """
    Load the words of an XML word lexicon.

    Args:
        path: Path to the lexicon file.

    Returns:
        The words in file order, stripped; empty entries are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
        LexiconLoadError: If the file is not well-formed XML.
    """
    path = _resolve(path)
    logger.info(f"Loading word lexicon from {path}")

    words = []
    f = _open(path)
    try:
        for _, elem in ET.iterparse(f, events=('end',)):
            if elem.tag == 'w':
                word = (elem.text or '').strip()
                if word:
                    words.append(word)
                elem.clear()
    except ET.ParseError as e:
        raise LexiconLoadError(path, f"malformed XML: {e}")
    finally:
        f.close()

    logger.info(f"Loaded {len(words)} lexicon words")
    return words
