from collections import Counter

import pytest

from feedback.services import hash_service
from feedback.services.hash_service import BASE62, generate_hash


def test_alphabet_is_62_symbols():
    assert len(BASE62) == 62
    assert len(set(BASE62)) == 62


@pytest.mark.parametrize("length", [1, 12, 16, 64])
def test_generate_hash_length_and_alphabet(length):
    for _ in range(50):
        token = generate_hash(length)
        assert len(token) == length
        assert set(token) <= set(BASE62)


def test_generate_hash_rejects_non_positive_length():
    with pytest.raises(ValueError):
        generate_hash(0)


def test_generate_hash_is_uniform_per_position():
    samples = [generate_hash(4) for _ in range(20000)]
    expected = len(samples) / 62
    for pos in range(4):
        counts = Counter(s[pos] for s in samples)
        # every symbol shows up, none is far off its fair share
        assert set(counts) == set(BASE62)
        for sym in BASE62:
            assert 0.5 * expected < counts[sym] < 1.5 * expected, (pos, sym, counts[sym])


def test_random_source_failure_propagates(monkeypatch):
    def broken(_seq):
        raise OSError("entropy source unavailable")

    monkeypatch.setattr(hash_service.secrets, "choice", broken)
    with pytest.raises(OSError):
        generate_hash(12)
