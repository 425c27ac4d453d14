"""
Unit tests for word-window chunking.
"""
import pytest

from interview_capture.services.chunking import chunk_text, count_tokens


def _words(n):
    return " ".join(f"w{i}" for i in range(n))


def test_blank_text_has_no_chunks():
    assert chunk_text("") == []
    assert chunk_text("   \n\t ") == []


def test_short_text_is_one_chunk():
    chunks = chunk_text(_words(500))

    assert len(chunks) == 1
    assert count_tokens(chunks[0]) == 500


def test_long_text_overlaps_neighbouring_chunks():
    chunks = chunk_text(_words(1000), chunk_size=500, overlap=50)

    assert len(chunks) == 3
    assert [count_tokens(c) for c in chunks] == [500, 500, 100]
    for previous, current in zip(chunks, chunks[1:]):
        assert previous.split()[-50:] == current.split()[:50]


def test_every_word_is_covered():
    chunks = chunk_text(_words(1234), chunk_size=100, overlap=10)

    covered = set()
    for chunk in chunks:
        covered.update(chunk.split())
    assert covered == set(_words(1234).split())
    assert chunks[-1].split()[-1] == "w1233"


def test_whitespace_is_normalized():
    assert chunk_text("a\n\nb\tc   d", chunk_size=10, overlap=0) == ["a b c d"]


@pytest.mark.parametrize("chunk_size, overlap", [(0, 0), (-1, 0), (10, 10), (10, -1)])
def test_invalid_parameters(chunk_size, overlap):
    with pytest.raises(ValueError):
        chunk_text("some words here", chunk_size=chunk_size, overlap=overlap)
