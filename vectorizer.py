"""N-gram / skip-gram vectorizer.

Turns a token sequence into a fixed-length float32 feature vector by
matching every candidate n-gram against a prebuilt dictionary:

  1. VocabularyBuilder  – carves the pool into per-size dictionaries (once)
  2. SequenceScanner    – enumerates probes for every size and skip distance
  3. DictionaryMatcher  – resolves probes to n-gram ids
  4. Accumulator        – counts hits per output slot
  5. Weighter           – applies TF, IDF or TFIDF

Setup validates the whole configuration eagerly; a constructed
NgramVectorizer is immutable and may be shared by concurrent callers,
since each transform() call owns its own frequency buffer.
"""

import sys

import numpy as np

from sequence_scanner import DictionaryMatcher, SequenceScanner
from utils import as_token_list, format_class_counts
from vocabulary import Vocabulary, VocabularyBuilder
from weighting import FrequencyAccumulator, Weighter, VALID_MODES

# ---- Default hyperparameters ----

DEFAULT_MIN_GRAM_LENGTH = 1
DEFAULT_MAX_GRAM_LENGTH = 1
DEFAULT_MAX_SKIP_COUNT = 0

# Keys accepted by NgramVectorizer.from_config().
CONFIG_KEYS = frozenset({
    "mode", "min_gram_length", "max_gram_length", "max_skip_count", "all",
    "pool_strings", "pool_int64s", "ngram_counts", "ngram_indexes", "weights",
})


class NgramVectorizer:
    """Dictionary-matching n-gram vectorizer."""

    def __init__(
        self,
        mode: str,
        *,
        ngram_counts,
        ngram_indexes,
        pool_strings=None,
        pool_int64s=None,
        weights=None,
        min_gram_length: int = DEFAULT_MIN_GRAM_LENGTH,
        max_gram_length: int = DEFAULT_MAX_GRAM_LENGTH,
        max_skip_count: int = DEFAULT_MAX_SKIP_COUNT,
        all_sizes: bool = False,
        verbose: bool = False,
    ):
        """Validate the configuration and build the dictionary.

        Args:
            mode: One of "TF", "IDF", "TFIDF".
            ngram_counts: Start offset of each size class in the pool.
            ngram_indexes: Output slot of each n-gram id.
            pool_strings: String token pool (exclusive with pool_int64s).
            pool_int64s: Integer token pool (exclusive with pool_strings).
            weights: Optional per-id weights used by IDF and TFIDF.
            min_gram_length: Smallest n-gram size (M), used when all_sizes.
            max_gram_length: Largest n-gram size (N).
            max_skip_count: Maximum number of skipped tokens (S).
            all_sizes: Match every size from M to N instead of N only.
            verbose: Print a vocabulary summary to stderr.

        Raises:
            ValueError: On any invalid configuration.
        """
        if mode not in VALID_MODES:
            raise ValueError(
                f"Unrecognized mode {mode!r} (expected one of {', '.join(VALID_MODES)})"
            )
        if min_gram_length < 1:
            raise ValueError(f"Positive min_gram_length is required, got {min_gram_length}")
        if max_gram_length < min_gram_length:
            raise ValueError(
                f"max_gram_length ({max_gram_length}) must be >= "
                f"min_gram_length ({min_gram_length})"
            )
        if max_skip_count < 0:
            raise ValueError(f"Non-negative max_skip_count is required, got {max_skip_count}")

        if pool_strings is not None and pool_int64s is not None:
            raise ValueError("Specify either pool_strings or pool_int64s, not both")
        pool = pool_strings if pool_strings is not None else pool_int64s
        if pool is None or len(pool) == 0:
            raise ValueError("A non-empty pool_strings or pool_int64s is required")

        self.verbose = verbose
        self.min_gram_length = min_gram_length
        self.max_gram_length = max_gram_length
        self.max_skip_count = max_skip_count
        self.all_sizes = bool(all_sizes)

        self._vocabulary = VocabularyBuilder(
            pool, ngram_counts, ngram_indexes, weights=weights,
        ).build()

        min_size = min_gram_length if self.all_sizes else max_gram_length
        self._scanner = SequenceScanner(min_size, max_gram_length, max_skip_count)
        self._matcher = DictionaryMatcher(self._vocabulary)
        self._weighter = Weighter(mode, self._vocabulary.slot_weights)

        if self.verbose:
            print(
                f"Vocabulary: {len(self._vocabulary)} n-grams "
                f"({format_class_counts(self._vocabulary.class_counts())}), "
                f"slots: {self.num_slots}, mode: {mode}, "
                f"sizes: {min_size}-{max_gram_length}, skips: 0-{max_skip_count}",
                file=sys.stderr,
            )

    @classmethod
    def from_config(cls, config: dict, verbose: bool = False) -> "NgramVectorizer":
        """Build from a mapping of configuration keys (e.g. parsed JSON)."""
        unknown = set(config) - CONFIG_KEYS
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        for key in ("mode", "ngram_counts", "ngram_indexes"):
            if key not in config:
                raise ValueError(f"Configuration key {key!r} is required")
        return cls(
            config["mode"],
            ngram_counts=config["ngram_counts"],
            ngram_indexes=config["ngram_indexes"],
            pool_strings=config.get("pool_strings"),
            pool_int64s=config.get("pool_int64s"),
            weights=config.get("weights"),
            min_gram_length=int(config.get("min_gram_length", DEFAULT_MIN_GRAM_LENGTH)),
            max_gram_length=int(config.get("max_gram_length", DEFAULT_MAX_GRAM_LENGTH)),
            max_skip_count=int(config.get("max_skip_count", DEFAULT_MAX_SKIP_COUNT)),
            all_sizes=bool(config.get("all", False)),
            verbose=verbose,
        )

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    @property
    def mode(self) -> str:
        return self._weighter.mode

    @property
    def num_slots(self) -> int:
        """Length of the output vector (max ngram_indexes + 1)."""
        return self._vocabulary.num_slots

    def frequencies(self, tokens) -> np.ndarray:
        """Count dictionary hits per output slot for one token sequence.

        Returns a fresh uint32 array of length num_slots.
        """
        token_list, kind = as_token_list(tokens)
        acc = FrequencyAccumulator(self._vocabulary.index_table, self.num_slots)
        # A sequence of the other token kind can never match.
        if kind == self._vocabulary.token_kind:
            acc.extend(self._matcher.scan(self._scanner, token_list))
        return acc.frequencies()

    def transform(self, tokens, out: np.ndarray = None) -> np.ndarray:
        """Vectorize one token sequence.

        Args:
            tokens: List, tuple or numpy array of strings or int32/int64
                integers. Arrays of any shape are flattened.
            out: Optional float32 buffer of length num_slots to write into.

        Returns:
            float32 array of shape (num_slots,); *out* itself when given.
        """
        if out is not None:
            if (not isinstance(out, np.ndarray) or out.dtype != np.float32
                    or out.shape != (self.num_slots,) or not out.flags.writeable):
                raise ValueError(
                    f"out must be a writeable float32 array of shape ({self.num_slots},)"
                )
        return self._weighter.apply(self.frequencies(tokens), out=out)

    def transform_batch(self, rows) -> np.ndarray:
        """Vectorize each row independently.

        Returns:
            float32 array of shape (len(rows), num_slots).
        """
        rows = list(rows)
        result = np.zeros((len(rows), self.num_slots), dtype=np.float32)
        for i, row in enumerate(rows):
            self.transform(row, out=result[i])
        return result
