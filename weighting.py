"""Frequency accumulation and TF / IDF / TFIDF weighting.

Uses numpy for the per-slot arithmetic: hits increment a zeroed uint32
counts array as the scan runs, and the weighting modes are whole-array
operations written into the output buffer.
"""

import numpy as np


MODE_TF = "TF"
MODE_IDF = "IDF"
MODE_TFIDF = "TFIDF"

VALID_MODES = (MODE_TF, MODE_IDF, MODE_TFIDF)


class FrequencyAccumulator:
    """Counts matched n-gram ids per output slot.

    One accumulator serves one call; the counts array is private to it.
    """

    __slots__ = ('_index_table', '_num_slots', '_counts')

    def __init__(self, index_table: np.ndarray, num_slots: int):
        self._index_table = index_table
        self._num_slots = num_slots
        self._counts = np.zeros(num_slots, dtype=np.uint32)

    def add(self, ngram_id: int):
        """Record one occurrence of *ngram_id* in its output slot."""
        slot = int(self._index_table[ngram_id])
        assert 0 <= slot < self._num_slots, \
            f"n-gram id {ngram_id} resolved to output slot {slot} out of range"
        self._counts[slot] += 1

    def extend(self, ngram_ids):
        for ngram_id in ngram_ids:
            self.add(ngram_id)

    def frequencies(self) -> np.ndarray:
        """Return per-slot counts as a uint32 array of length num_slots."""
        return self._counts


class Weighter:
    """Turns raw per-slot counts into the final float32 output vector.

    Weights are read by output slot: slot i uses slot_weights[i].
    """

    def __init__(self, mode: str, slot_weights: np.ndarray = None):
        if mode not in VALID_MODES:
            raise ValueError(f"Unrecognized mode: {mode!r}")
        self.mode = mode
        self.slot_weights = slot_weights

    def apply(self, frequencies: np.ndarray, out: np.ndarray = None) -> np.ndarray:
        """Weight *frequencies* into *out* (allocated if None).

        TF:    out = F
        IDF:   out = w where F > 0 (1.0 without weights), else 0
        TFIDF: out = F * w (F without weights)
        """
        if out is None:
            out = np.empty(frequencies.shape[0], dtype=np.float32)
        w = self.slot_weights

        if self.mode == MODE_TF:
            out[:] = frequencies
        elif self.mode == MODE_IDF:
            present = frequencies > 0
            if w is not None:
                # Unseen slots are a literal 0, whatever their weight.
                out[:] = np.where(present, w, 0.0)
            else:
                out[:] = present
        else:
            if w is not None:
                np.multiply(frequencies, w, out=out)
            else:
                out[:] = frequencies
        return out
