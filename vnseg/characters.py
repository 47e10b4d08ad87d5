"""
Character handling for Vietnamese text.

Provides case conversion for the Vietnamese alphabet and an accent
normalizer that moves tone marks of the syllables oa, oe and uy to their
canonical position (hòa -> hoà).
"""

import unicodedata
from typing import Dict, Optional

# ============================================================================
# Case Tables
# ============================================================================

# Precomposed Vietnamese letters, upper and lower case in the same order
VIETNAMESE_UPPER = (
    "ÀÁẢÃẠĂẰẮẲẴẶÂẦẤẨẪẬ"
    "ĐÈÉẺẼẸÊỀẾỂỄỆ"
    "ÌÍỈĨỊ"
    "ÒÓỎÕỌÔỒỐỔỖỘƠỜỚỞỠỢ"
    "ÙÚỦŨỤƯỪỨỬỮỰ"
    "ỲÝỶỸỴ"
)
VIETNAMESE_LOWER = (
    "àáảãạăằắẳẵặâầấẩẫậ"
    "đèéẻẽẹêềếểễệ"
    "ìíỉĩị"
    "òóỏõọôồốổỗộơờớởỡợ"
    "ùúủũụưừứửữự"
    "ỳýỷỹỵ"
)

UPPER_TO_LOWER: Dict[str, str] = dict(zip(VIETNAMESE_UPPER, VIETNAMESE_LOWER))


def is_valid_upper(char: str) -> bool:
    """Check whether a character is an accented Vietnamese uppercase letter."""
    return char in UPPER_TO_LOWER


def to_lower(char: str) -> str:
    """Lowercase a Vietnamese uppercase letter, other characters unchanged."""
    return UPPER_TO_LOWER.get(char, char)


def lower_first(text: str) -> str:
    """
    Lowercase the first character of a text if it is an uppercase letter.

    Args:
        text: A non-empty string.

    Returns:
        The text with its first character lowercased.

    Raises:
        ValueError: If the text is empty.
    """
    if not text:
        raise ValueError("Cannot normalize an empty phrase")
    first = text[0]
    if 'A' <= first <= 'Z':
        first = first.lower()
    elif is_valid_upper(first):
        first = to_lower(first)
    return first + text[1:]


# ============================================================================
# Accent Normalization
# ============================================================================

# Old-style tone placement -> new-style tone placement
ACCENT_RULES: Dict[str, str] = {
    "òa": "oà", "óa": "oá", "ỏa": "oả", "õa": "oã", "ọa": "oạ",
    "òe": "oè", "óe": "oé", "ỏe": "oẻ", "õe": "oẽ", "ọe": "oẹ",
    "ùy": "uỳ", "úy": "uý", "ủy": "uỷ", "ũy": "uỹ", "ụy": "uỵ",
}


def _with_upper_variants(rules: Dict[str, str]) -> Dict[str, str]:
    """Extend a rule table with Capitalized and UPPER forms of each rule."""
    extended = dict(rules)
    for source, target in rules.items():
        extended[source.capitalize()] = target.capitalize()
        extended[source.upper()] = target.upper()
    return extended


class AccentNormalizer:
    """
    Canonicalizes the position of tone marks in Vietnamese syllables.

    The text is first composed to NFC so that decomposed input matches the
    rule table. Normalization is idempotent.
    """

    def __init__(self, rules: Optional[Dict[str, str]] = None):
        self.rules = _with_upper_variants(rules if rules is not None else ACCENT_RULES)

    def normalize(self, text: str) -> str:
        text = unicodedata.normalize('NFC', text)
        for source, target in self.rules.items():
            if source in text:
                text = text.replace(source, target)
        return text
