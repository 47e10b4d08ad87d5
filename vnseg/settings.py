"""
Settings and configuration for vnseg.

Paths can be overridden with environment variables; the remaining values
are tuning constants for the segmentation lattice.
"""

import os
from pathlib import Path
from typing import Optional

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Lexicon automaton - defaults to data/lexicon_dfa.xml
DEFAULT_LEXICON_DFA_PATH = DATA_DIR / "lexicon_dfa.xml"
LEXICON_DFA_PATH = Path(os.environ.get("VNSEG_LEXICON_DFA", DEFAULT_LEXICON_DFA_PATH))

# Optional user lexicon (XML word corpus)
_external = os.environ.get("VNSEG_EXTERNAL_LEXICON")
EXTERNAL_LEXICON_PATH: Optional[Path] = Path(_external) if _external else None

# Debug mode: trace every simulator step
DEBUG = os.environ.get("VNSEG_DEBUG", "").lower() in ("1", "true", "yes")

# Weight of a fallback single-syllable edge in the lattice
MAX_EDGE_WEIGHT = 100.0

# Weight of an edge for a known multi-syllable word
DEFAULT_EDGE_WEIGHT = 1.0

# Longest word (in syllables) considered when building the lattice
MAX_WORD_SYLLABLES = 6
