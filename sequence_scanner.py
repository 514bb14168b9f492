"""Candidate n-gram generation and dictionary matching.

The scanner enumerates every n-gram of every configured size at every
configured skip distance; the matcher looks each probe up in the
Vocabulary. Misses are the common case and are dropped silently.
"""

from ngram_hash import NGram
from vocabulary import Vocabulary


class SequenceScanner:
    """Generates probe n-grams from a token sequence.

    For size 1 a single-token window slides over every position (skip
    does not apply to unigrams). For sizes >= 2, each skip distance
    si in 1..max_skip+1 samples size tokens at stride si from every
    start position whose last sampled token is still in range.
    """

    def __init__(self, min_size: int, max_size: int, max_skip: int):
        assert 1 <= min_size <= max_size
        assert max_skip >= 0
        self.min_size = min_size
        self.max_size = max_size
        self.max_skip = max_skip

    def sizes(self) -> range:
        return range(self.min_size, self.max_size + 1)

    def iter_probes(self, tokens: list, size: int):
        """Yield every probe NGram of length *size* over *tokens*."""
        n = len(tokens)
        if size == 1:
            for token in tokens:
                yield NGram((token,))
            return

        for si in range(1, self.max_skip + 2):
            span = si * (size - 1)
            for start in range(0, n - span):
                yield NGram(tokens[start:start + span + 1:si])


class DictionaryMatcher:
    """Resolves probes against a Vocabulary."""

    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary

    def match(self, probe: NGram):
        """Return the id of *probe*, or None on a miss."""
        return self.vocabulary.lookup(probe)

    def scan(self, scanner: SequenceScanner, tokens: list):
        """Yield the id of every probe that hits the dictionary.

        Sizes with no dictionary entries are not probed; they could
        never produce a hit.
        """
        for size in scanner.sizes():
            if not self.vocabulary.has_size(size):
                continue
            for probe in scanner.iter_probes(tokens, size):
                ngram_id = self.match(probe)
                if ngram_id is not None:
                    yield ngram_id
