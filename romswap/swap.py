"""Byte permutations between the three word orders.

Every pair of distinct orders is related by two disjoint transpositions of
the byte indices inside a 4-byte word, so each transform is its own inverse.
"""

from __future__ import annotations

import numpy as np

from romswap.types import WORD_SIZE, RomType

IDENTITY = (0, 1, 2, 3)

TRANSPOSITIONS: dict[frozenset, tuple[tuple[int, int], tuple[int, int]]] = {
    # swap bytes within each half-word
    frozenset((RomType.BIG_ENDIAN, RomType.BYTE_SWAPPED)): ((0, 1), (2, 3)),
    # full reversal
    frozenset((RomType.BIG_ENDIAN, RomType.LITTLE_ENDIAN)): ((0, 3), (1, 2)),
    # swap the two half-words
    frozenset((RomType.BYTE_SWAPPED, RomType.LITTLE_ENDIAN)): ((0, 2), (1, 3)),
}


def _transpositions(src: RomType, dst: RomType) -> tuple[tuple[int, int], ...]:
    return TRANSPOSITIONS.get(frozenset((src, dst)), ())


def permutation(src: RomType, dst: RomType) -> tuple[int, ...]:
    """Return ``perm`` such that ``out[i] = word[perm[i]]`` converts *src* to *dst*."""
    perm = list(IDENTITY)
    for a, b in _transpositions(src, dst):
        perm[a], perm[b] = perm[b], perm[a]
    return tuple(perm)


def swap(word: bytearray | memoryview, src: RomType, dst: RomType) -> None:
    """Reorder one 4-byte *word* in place from *src* order to *dst* order.

    ``src == dst`` leaves the word untouched.

    Raises:
        ValueError: If *word* is not exactly 4 bytes long.
    """
    if len(word) != WORD_SIZE:
        raise ValueError(f"word must be {WORD_SIZE} bytes, got {len(word)}")
    for a, b in _transpositions(src, dst):
        word[a], word[b] = word[b], word[a]


def swap_words(data: bytes | bytearray | memoryview, src: RomType, dst: RomType) -> bytes:
    """Apply :func:`swap` to every word of *data* and return the result.

    Raises:
        ValueError: If ``len(data)`` is not a multiple of 4.
    """
    if len(data) % WORD_SIZE:
        raise ValueError(f"data length {len(data)} is not a multiple of {WORD_SIZE}")
    perm = permutation(src, dst)
    if perm == IDENTITY:
        return bytes(data)
    words = np.frombuffer(data, dtype=np.uint8).reshape(-1, WORD_SIZE)
    return words[:, list(perm)].tobytes()
