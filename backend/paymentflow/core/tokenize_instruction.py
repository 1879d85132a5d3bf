"""Instruction Tokenizer — whitespace normalization and token splitting.

Invariants:
    - Whitespace is exactly: space, \\t, \\n, \\r, \\f, \\v (nothing else, no Unicode spaces)
    - Output tokens are non-empty and keep their original casing and punctuation
    - Empty or whitespace-only input yields an empty token list
    - No regular expressions: explicit character classification only

Design Decisions:
    - Hand-rolled scan over str.split(): str.split() treats Unicode spaces as separators,
      which would widen the accepted whitespace set
"""

_WHITESPACE = frozenset(" \t\n\r\f\v")
_TRAILING_PUNCTUATION = frozenset(".,!?")


def is_whitespace(ch: str) -> bool:
    return ch in _WHITESPACE


def normalize_whitespace(text: str) -> str:
    """Trim both ends and collapse every internal whitespace run to one space."""
    start, end = 0, len(text) - 1
    while start <= end and is_whitespace(text[start]):
        start += 1
    while end >= start and is_whitespace(text[end]):
        end -= 1
    if start > end:
        return ""

    out: list[str] = []
    in_space = False
    for ch in text[start:end + 1]:
        if is_whitespace(ch):
            if not in_space:
                out.append(" ")
                in_space = True
        else:
            out.append(ch)
            in_space = False
    return "".join(out)


def tokenize(text: str) -> list[str]:
    """Normalize then split into tokens."""
    normalized = normalize_whitespace(text)
    if not normalized:
        return []
    return [t for t in normalized.split(" ") if t]


def strip_trailing_punctuation(token: str) -> str:
    """Drop a single trailing '.', ',', '!' or '?'."""
    if token and token[-1] in _TRAILING_PUNCTUATION:
        return token[:-1]
    return token
