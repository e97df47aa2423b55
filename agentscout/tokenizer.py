"""Tokenizer: normalizes free text into comparable word tokens."""

from __future__ import annotations

import re

from agentscout.constants import MIN_TOKEN_LENGTH

_NON_WORD = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str | None) -> list[str]:
    """Lower-case *text*, strip punctuation and split into tokens.

    Punctuation becomes a space so it never merges adjacent words. Tokens
    shorter than ``MIN_TOKEN_LENGTH`` are dropped. Only ASCII letters and
    digits survive; there is no Unicode folding or stemming.
    """
    if not text:
        return []
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [tok for tok in cleaned.split() if len(tok) >= MIN_TOKEN_LENGTH]
