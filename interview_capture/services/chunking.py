"""
Word-window chunking for knowledge artifacts.
"""
from typing import List


def count_tokens(text: str) -> int:
    """Whitespace word count; a cheap stand-in for model tokenization."""
    return len(text.split())


def chunk_text(text: str, chunk_size: int = 500, overlap: int = 50) -> List[str]:
    """
    Split text into overlapping windows of whitespace-delimited words.

    Each chunk after the first starts with the last `overlap` words of the
    previous one. The last chunk may be shorter than `chunk_size`. Words are
    re-joined with single spaces, so original line breaks are not preserved.

    Args:
        text: Text to split
        chunk_size: Words per chunk
        overlap: Words shared between neighbouring chunks

    Returns:
        List of chunk strings, empty for blank text

    Raises:
        ValueError: If chunk_size is not positive or overlap is not smaller than chunk_size
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError("overlap must be between 0 and chunk_size - 1")

    words = text.split()
    if not words:
        return []

    step = chunk_size - overlap
    chunks = []
    for start in range(0, len(words), step):
        window = words[start:start + chunk_size]
        chunks.append(" ".join(window))
        if start + chunk_size >= len(words):
            break

    return chunks
