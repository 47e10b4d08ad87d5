"""
Shared fixtures: small lexicon automata built directly as tries.
"""

import xml.etree.ElementTree as ET

import pytest

from vnseg.fsm import DFA
from vnseg.recognizer import DFALexiconRecognizer
from vnseg.resolver import ShortestPathResolver
from vnseg.segmenter import Segmenter


LEXICON = [
    "viet", "nam", "viet nam",
    "hoa", "hoc", "hoa binh",
    "hoc sinh", "sinh", "vien", "sinh vien",
    "ab cd", "ab cd ef",
    "hà nội", "hà", "nội", "mùa", "thu", "mùa thu",
]


def build_dfa(words):
    """Build a trie-shaped DFA accepting exactly `words`."""
    dfa = DFA()
    dfa.add_state(0, initial=True)
    next_id = 1
    for word in words:
        state = dfa.initial_state
        for char in word:
            target = dfa.next_state(state, char)
            if target is None:
                target = dfa.add_state(next_id)
                dfa.add_transition(state.id, char, next_id)
                next_id += 1
            state = target
        state.final = True
    return dfa


def write_dfa_xml(dfa, path):
    """Serialize a DFA to the XML automaton format."""
    root = ET.Element('fsm', type='dfa')
    states = ET.SubElement(root, 'states')
    transitions = ET.SubElement(root, 'transitions')
    initial = dfa.initial_state.id
    for state in dfa.states():
        attrs = {'id': str(state.id)}
        if state.id == initial:
            attrs['initial'] = 'true'
        if state.final:
            attrs['final'] = 'true'
        ET.SubElement(states, 's', attrs)
        for char, dst in state.transitions.items():
            ET.SubElement(transitions, 't', {'src': str(state.id), 'dst': str(dst), 'inp': char})
    ET.ElementTree(root).write(str(path), encoding='utf-8', xml_declaration=True)
    return path


def write_lexicon_xml(words, path):
    root = ET.Element('corpus')
    body = ET.SubElement(root, 'body')
    for word in words:
        ET.SubElement(body, 'w').text = word
    ET.ElementTree(root).write(str(path), encoding='utf-8', xml_declaration=True)
    return path


@pytest.fixture
def dfa():
    return build_dfa(LEXICON)


@pytest.fixture
def dfa_path(tmp_path, dfa):
    return write_dfa_xml(dfa, tmp_path / "lexicon_dfa.xml")


@pytest.fixture
def recognizer(dfa):
    return DFALexiconRecognizer(dfa)


@pytest.fixture
def segmenter(recognizer):
    return Segmenter(recognizer, resolver=ShortestPathResolver())
