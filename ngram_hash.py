"""Order-sensitive hashing and equality for token n-grams.

Tokens are either strings or integers. Integers hash to their own value
truncated to 64 bits; strings hash to a BLAKE2b digest so the result is
stable across processes (Python's built-in str hash is salted).

The multi-token hash combines per-token hashes left to right, so
(a, b) and (b, a) land in different buckets.
"""

import hashlib

MASK64 = 0xFFFFFFFFFFFFFFFF

# Golden-ratio constant mixed into every combine step.
HASH_MIX = 0x9E3779B9


def token_hash(token) -> int:
    """Deterministic 64-bit hash of a single token."""
    if isinstance(token, str):
        digest = hashlib.blake2b(token.encode('utf-8'), digest_size=8).digest()
        return int.from_bytes(digest, 'little')
    return token & MASK64


def ngram_hash(tokens) -> int:
    """Deterministic 64-bit hash of an ordered token sequence.

    Seeds with the first token's hash, then folds in each following
    token. Returns 0 for an empty sequence.
    """
    it = iter(tokens)
    try:
        h = token_hash(next(it))
    except StopIteration:
        return 0
    for token in it:
        h ^= (token_hash(token) + HASH_MIX + (h << 6) + (h >> 2)) & MASK64
    return h


class NGram:
    """Immutable n-gram key used by the per-size dictionaries.

    Equality is elementwise and order-sensitive. The combined hash is
    computed once at construction.
    """

    __slots__ = ('tokens', '_hash')

    def __init__(self, tokens):
        tokens = tuple(tokens)
        if not tokens:
            raise ValueError("An n-gram must hold at least one token")
        self.tokens = tokens
        self._hash = ngram_hash(tokens)

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, NGram):
            return NotImplemented
        return self._hash == other._hash and self.tokens == other.tokens

    def __repr__(self):
        return f"NGram{self.tokens!r}"
