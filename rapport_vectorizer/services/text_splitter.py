"""Greedy word-wrap segmentation of extracted report text.

Words (runs of non-whitespace) are packed into a chunk, joined by single
spaces, until the next word would make the chunk longer than
``max_length``.  A word that is longer than ``max_length`` on its own
becomes a chunk by itself and is not cut.  Joining the chunks with single
spaces gives back the original words in order.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(logger_name=__name__)


def split_text(text: str, max_length: int) -> list[str]:
    """Split *text* into chunks of at most *max_length* characters.

    Parameters
    ----------
    text:
        Raw text; any whitespace (spaces, newlines, tabs) separates words.
    max_length:
        Character budget per chunk.  Must be at least 1.

    Returns
    -------
    list[str]
        Ordered, non-empty chunks.  Empty or whitespace-only input returns
        an empty list.

    Raises
    ------
    ValueError
        If *max_length* is smaller than 1.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}")

    chunks: list[str] = []
    current: list[str] = []
    current_length = 0

    for word in text.split():
        # A separating space is needed only when the chunk already has words.
        added = len(word) + (1 if current else 0)
        if current and current_length + added > max_length:
            chunks.append(" ".join(current))
            current = [word]
            current_length = len(word)
        else:
            current.append(word)
            current_length += added

    if current:
        chunks.append(" ".join(current))

    logger.debug("text_split", chunks=len(chunks), max_length=max_length)
    return chunks


def truncate_at_word_boundary(text: str, max_length: int) -> str:
    """Return the first chunk :func:`split_text` would produce, or *text* unchanged.

    A non-positive *max_length* disables truncation.
    """
    if max_length <= 0 or len(text) <= max_length:
        return text
    chunks = split_text(text, max_length)
    return chunks[0] if chunks else ""
