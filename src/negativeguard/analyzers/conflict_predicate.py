"""Match-type aware test for whether a negative keyword blocks a positive one.

Google Ads compares whole words, so a plain substring check over-reports
conflicts whenever a short negative happens to sit inside a longer word
("mini" in "mining", "ac" in "vacuum"). ``has_keyword_conflict`` applies
word-boundary and token-sequence matching instead. ``has_legacy_conflict``
keeps the substring rule around so a run can count how many conflicts it
would have wrongly reported.

Both functions are pure and only look at text; the positive keyword's match
type is accepted but does not change the verdict.
"""

import re
from typing import Any

from negativeguard.models.keyword import KeywordMatchType, normalize_keyword_text

# Phrase negatives this short only match as a standalone word
SHORT_PHRASE_MAX_LENGTH = 2

# Legacy broad-match modifier, e.g. "+used +pump"
BROAD_MODIFIER = "+"


def _tokenize(text: str) -> list[str]:
    return text.split()


def _broad_terms(negative_text: str) -> list[str]:
    terms = (token.lstrip(BROAD_MODIFIER) for token in _tokenize(negative_text))
    return [term for term in terms if term]


def contains_whole_word(text: str, word: str) -> bool:
    """Check ``word`` occurs in ``text`` with no word character on either side."""
    if not word:
        return False
    pattern = rf"(?<!\w){re.escape(word)}(?!\w)"
    return re.search(pattern, text) is not None


def contains_token_sequence(tokens: list[str], sequence: list[str]) -> bool:
    """Check ``sequence`` appears contiguously, in order, within ``tokens``."""
    size = len(sequence)
    if size == 0 or size > len(tokens):
        return False
    return any(
        tokens[start : start + size] == sequence
        for start in range(len(tokens) - size + 1)
    )


def _broad_conflict(negative_text: str, positive_text: str) -> bool:
    terms = _broad_terms(negative_text)
    if not terms:
        return False
    if len(terms) == 1:
        return contains_whole_word(positive_text, terms[0])

    positive_tokens = set(_tokenize(positive_text))
    return all(term in positive_tokens for term in terms)


def _phrase_conflict(negative_text: str, positive_text: str) -> bool:
    if len(negative_text) <= SHORT_PHRASE_MAX_LENGTH:
        return contains_whole_word(positive_text, negative_text)
    return contains_token_sequence(_tokenize(positive_text), _tokenize(negative_text))


def has_keyword_conflict(
    negative_text: str,
    negative_match_type: Any,
    positive_text: str,
    positive_match_type: Any = None,
) -> bool:
    """Decide whether a negative keyword suppresses a positive keyword.

    Args:
        negative_text: Negative keyword text
        negative_match_type: Negative match type (EXACT, PHRASE, BROAD)
        positive_text: Positive keyword text
        positive_match_type: Positive match type, not used in the comparison

    Returns:
        True if the negative blocks the positive. Unrecognized match types
        never conflict.
    """
    negative = normalize_keyword_text(negative_text)
    positive = normalize_keyword_text(positive_text)
    if not negative or not positive:
        return False

    match_type = KeywordMatchType.parse(negative_match_type)
    if match_type is KeywordMatchType.BROAD:
        return _broad_conflict(negative, positive)
    elif match_type is KeywordMatchType.PHRASE:
        return _phrase_conflict(negative, positive)
    elif match_type is KeywordMatchType.EXACT:
        return negative == positive
    return False


def has_legacy_conflict(
    negative_text: str,
    negative_match_type: Any,
    positive_text: str,
    positive_match_type: Any = None,
) -> bool:
    """Substring-based conflict rule the word-aware check replaced.

    Phrase negatives match anywhere in the positive text; every broad term
    matches if it is a substring of any positive word.
    """
    negative = normalize_keyword_text(negative_text)
    positive = normalize_keyword_text(positive_text)
    if not negative or not positive:
        return False

    match_type = KeywordMatchType.parse(negative_match_type)
    if match_type is KeywordMatchType.BROAD:
        terms = _broad_terms(negative)
        positive_tokens = _tokenize(positive)
        return bool(terms) and all(
            any(term in token for token in positive_tokens) for term in terms
        )
    elif match_type is KeywordMatchType.PHRASE:
        return negative in positive
    elif match_type is KeywordMatchType.EXACT:
        return negative == positive
    return False
