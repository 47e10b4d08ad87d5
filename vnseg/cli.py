"""
Command line interface for vnseg.

Usage:
    vnseg "Hà Nội mùa thu"               # best segmentation
    vnseg -a "học sinh viên"             # every candidate
    vnseg -f "học sinh viên"             # full JSON with lattice
    vnseg -d lexicon_dfa.xml "việt nam"  # custom lexicon automaton
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from vnseg import __version__
from vnseg.models import SegmentationResult
from vnseg.segmenter import Segmenter
from vnseg.settings import LEXICON_DFA_PATH


def format_words(words) -> str:
    return " ".join(f"[{word}]" for word in words)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Command line interface for vnseg (Vietnamese word segmenter)',
        prog='vnseg',
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Vietnamese text to segment',
    )

    parser.add_argument(
        '-d', '--dfa',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to the lexicon automaton XML file',
    )

    parser.add_argument(
        '-e', '--external',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to a user word lexicon XML file',
    )

    parser.add_argument(
        '-f', '--full',
        action='store_true',
        help='Full segmentation info as JSON',
    )

    parser.add_argument(
        '-a', '--all',
        action='store_true',
        help='Print every candidate segmentation',
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )
    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'vnseg {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''
    if not text.strip():
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if parsed.debug else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    dfa_path = Path(parsed.dfa) if parsed.dfa else LEXICON_DFA_PATH
    if not dfa_path.exists() and not Path(f"{dfa_path}.gz").exists():
        print(f"Error: lexicon automaton not found: {dfa_path}", file=sys.stderr)
        print("Set VNSEG_LEXICON_DFA or pass --dfa PATH", file=sys.stderr)
        return 1

    try:
        segmenter = Segmenter.from_settings(dfa_path, parsed.external)
    except Exception as e:
        print(f'Error loading lexicon: {e}', file=sys.stderr)
        return 1

    try:
        words = segmenter.tokenize(text)
        if parsed.full:
            result = SegmentationResult.from_segmenter(segmenter, text, words, with_lattice=True)
            print(result.model_dump_json())
        elif parsed.all:
            print(segmenter.format_result() or format_words(words))
        else:
            print(format_words(words))
        return 0

    except Exception as e:
        print(f'Error processing text: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
