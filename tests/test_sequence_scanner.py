"""Tests for probe generation and dictionary matching."""

from ngram_hash import NGram
from sequence_scanner import DictionaryMatcher, SequenceScanner
from vocabulary import VocabularyBuilder


def _tokens(probes):
    return [p.tokens for p in probes]


def test_skip_gram_enumeration():
    scanner = SequenceScanner(2, 2, max_skip=1)
    probes = _tokens(scanner.iter_probes([1, 2, 3, 4, 5], 2))
    assert probes == [
        (1, 2), (2, 3), (3, 4), (4, 5),
        (1, 3), (2, 4), (3, 5),
    ]


def test_unigrams_ignore_skip():
    scanner = SequenceScanner(1, 1, max_skip=3)
    probes = _tokens(scanner.iter_probes(["a", "b", "c"], 1))
    assert probes == [("a",), ("b",), ("c",)]


def test_trigram_with_stride_two():
    scanner = SequenceScanner(3, 3, max_skip=1)
    probes = _tokens(scanner.iter_probes([1, 2, 3, 4, 5], 3))
    assert probes == [(1, 2, 3), (2, 3, 4), (3, 4, 5), (1, 3, 5)]


def test_sequence_shorter_than_ngram_yields_nothing():
    scanner = SequenceScanner(3, 3, max_skip=0)
    assert list(scanner.iter_probes([1, 2], 3)) == []
    assert list(scanner.iter_probes([], 3)) == []


def test_sizes_span_min_to_max():
    assert list(SequenceScanner(1, 3, max_skip=0).sizes()) == [1, 2, 3]
    assert list(SequenceScanner(2, 2, max_skip=4).sizes()) == [2]


def test_matcher_returns_ids_of_hits_only():
    vocab = VocabularyBuilder(["a", "b", "b", "c"], [0, 2], [0, 1, 2]).build()
    matcher = DictionaryMatcher(vocab)
    assert matcher.match(NGram(["a"])) == 0
    assert matcher.match(NGram(["b", "c"])) == 2
    assert matcher.match(NGram(["c", "b"])) is None

    scanner = SequenceScanner(1, 2, max_skip=0)
    ids = list(matcher.scan(scanner, ["a", "b", "c", "a"]))
    # unigrams a, b, a then bigram (b, c)
    assert ids == [0, 1, 0, 2]


def test_matcher_skips_sizes_missing_from_dictionary():
    vocab = VocabularyBuilder([1, 2], [0, 0], [0]).build()
    matcher = DictionaryMatcher(vocab)
    scanner = SequenceScanner(1, 3, max_skip=1)
    ids = list(matcher.scan(scanner, [1, 9, 2, 1, 2]))
    # (1, 2) at stride 2 from position 0, contiguous at position 3
    assert sorted(ids) == [0, 0]
