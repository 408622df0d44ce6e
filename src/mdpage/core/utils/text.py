"""Word count, reading time and description derived from a markdown body"""

import math
import re


WORDS_PER_MINUTE = 250
DESCRIPTION_LENGTH = 150

_FENCED_CODE_RE = re.compile(r'```.*?```', re.DOTALL)
_STRUCK_RE = re.compile(r'~~.+?~~')
_MARKUP_CHARS_RE = re.compile(r'[#*_~`>\-|]')
_DESCRIPTION_STRIP_RE = re.compile(r'[#*_~`>\-|\[\]()!]')


def count_words(text: str) -> int:
    """Count readable words: code fences and struck-through spans are not read."""
    text = _FENCED_CODE_RE.sub('', text)
    text = _STRUCK_RE.sub(' ', text)
    text = _MARKUP_CHARS_RE.sub(' ', text)
    return len(text.split())


def reading_time(word_count: int) -> str:
    minutes = max(1, math.ceil(word_count / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def summarize(text: str) -> str:
    """Plain-text excerpt for social preview tags."""
    excerpt = _DESCRIPTION_STRIP_RE.sub('', text)[:DESCRIPTION_LENGTH].strip()
    return f"{excerpt}..."
