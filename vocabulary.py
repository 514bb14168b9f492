"""N-gram dictionary construction.

The pool is a flat list of tokens carved into size classes by start
offsets: class 1 holds unigrams, class 2 bigrams, and so on. Every
class gets its own dict (NGram -> id). Ids are assigned sequentially,
smallest class first, pool order within a class.

The resulting Vocabulary is immutable and shared read-only by every
scan; its numpy tables are flagged non-writeable.
"""

import numpy as np

from ngram_hash import NGram
from utils import TOKEN_KIND_INT, pool_token_kind


class Vocabulary:
    """Per-size n-gram lookup plus the id -> slot and slot -> weight tables.

    Built by VocabularyBuilder; not meant to be constructed directly.
    """

    def __init__(self, classes: dict, token_kind: str,
                 index_table: np.ndarray, weights: np.ndarray = None,
                 slot_weights: np.ndarray = None):
        self._classes = classes
        self.token_kind = token_kind
        self.index_table = index_table
        self.weights = weights
        self.slot_weights = slot_weights
        self.num_slots = int(index_table.max()) + 1

    def __len__(self):
        return sum(len(d) for d in self._classes.values())

    @property
    def sizes(self) -> list[int]:
        """Size classes that hold at least one n-gram, ascending."""
        return sorted(k for k, d in self._classes.items() if d)

    def class_counts(self) -> dict[int, int]:
        return {k: len(d) for k, d in self._classes.items() if d}

    def has_size(self, size: int) -> bool:
        return bool(self._classes.get(size))

    def lookup(self, ngram: NGram):
        """Return the id of *ngram*, or None if it is not in the dictionary."""
        table = self._classes.get(len(ngram))
        if table is None:
            return None
        return table.get(ngram)

    def __contains__(self, ngram):
        return self.lookup(ngram) is not None

    def items(self):
        """Yield (NGram, id) pairs in id order."""
        entries = []
        for table in self._classes.values():
            entries.extend(table.items())
        entries.sort(key=lambda e: e[1])
        return iter(entries)


class VocabularyBuilder:
    """Builds a Vocabulary from a token pool and per-size start offsets.

    All checks raise ValueError; nothing partially built escapes.
    """

    def __init__(self, pool, ngram_counts, ngram_indexes, weights=None):
        """
        Args:
            pool: Flat sequence of tokens (all strings or all integers).
            ngram_counts: Start offset of each size class in the pool.
                Entry k-1 starts the class of k-grams.
            ngram_indexes: Output slot for each n-gram id.
            weights: Optional weights, same length as ngram_indexes.
                Weighting reads them by output slot.
        """
        self.pool = list(pool)
        self.ngram_counts = [int(c) for c in ngram_counts]
        self.ngram_indexes = np.asarray(ngram_indexes, dtype=np.int64)
        self.weights = (None if weights is None
                        else np.asarray(weights, dtype=np.float32))

    def _split_classes(self):
        """Yield (size, start, end) for every size class."""
        total = len(self.pool)
        n_classes = len(self.ngram_counts)
        for i, start in enumerate(self.ngram_counts):
            size = i + 1
            end = self.ngram_counts[i + 1] if i + 1 < n_classes else total
            if start < 0 or end < start or end > total:
                raise ValueError(
                    f"n-gram counts out of bounds for {size}-grams "
                    f"(start={start}, end={end}, pool={total})"
                )
            yield size, start, end

    def _slot_weights(self, num_slots: int) -> np.ndarray:
        """Weights read by output slot: slot i takes weights[i].

        Slots past the end of the weight table get 0.
        """
        slot_weights = np.zeros(num_slots, dtype=np.float32)
        n = min(num_slots, self.weights.size)
        slot_weights[:n] = self.weights[:n]
        return slot_weights

    def build(self) -> Vocabulary:
        if not self.pool:
            raise ValueError("Token pool must not be empty")
        if not self.ngram_counts:
            raise ValueError("Non-empty ngram_counts is required")
        if self.ngram_indexes.ndim != 1 or self.ngram_indexes.size == 0:
            raise ValueError("Non-empty 1-D ngram_indexes is required")
        if (self.ngram_indexes < 0).any():
            raise ValueError("ngram_indexes has a negative index")

        token_kind = pool_token_kind(self.pool)
        # Own the tokens; n-grams never alias caller memory.
        if token_kind == TOKEN_KIND_INT:
            pool = [int(t) for t in self.pool]
        else:
            pool = list(self.pool)

        classes = {}
        ngram_id = 0
        for size, start, end in self._split_classes():
            items = end - start
            if items % size != 0:
                raise ValueError(
                    f"Number of items must compose whole {size}-grams "
                    f"({items} items)"
                )
            table = {}
            for offset in range(start, end, size):
                ngram = NGram(pool[offset:offset + size])
                if ngram in table:
                    raise ValueError(
                        f"Duplicate {size}-gram {ngram.tokens!r} detected in pool"
                    )
                table[ngram] = ngram_id
                ngram_id += 1
            classes[size] = table

        if ngram_id != len(self.ngram_indexes):
            raise ValueError(
                f"n-grams in the pool ({ngram_id}) do not match "
                f"ngram_indexes size ({len(self.ngram_indexes)})"
            )

        index_table = self.ngram_indexes.copy()
        index_table.setflags(write=False)
        num_slots = int(index_table.max()) + 1

        weights = slot_weights = None
        if self.weights is not None:
            if self.weights.shape != index_table.shape:
                raise ValueError(
                    f"weights ({self.weights.size}) and ngram_indexes "
                    f"({index_table.size}) must have equal size"
                )
            weights = self.weights.copy()
            weights.setflags(write=False)
            slot_weights = self._slot_weights(num_slots)
            slot_weights.setflags(write=False)

        return Vocabulary(classes, token_kind, index_table,
                          weights=weights, slot_weights=slot_weights)
