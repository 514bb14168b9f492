#!/usr/bin/env python3
"""Command-line interface for the n-gram vectorizer.

Vectorizer settings come from a JSON config file holding the same keys
as NgramVectorizer.from_config(). Input files hold one pre-tokenized
sequence per line, tokens separated by whitespace.
"""

import argparse
import json
import sys
import time

import numpy as np

from utils import format_class_counts
from vectorizer import NgramVectorizer


def _load_vectorizer(path: str, verbose: bool) -> NgramVectorizer:
    with open(path, 'r', encoding='utf-8') as f:
        config = json.load(f)
    return NgramVectorizer.from_config(config, verbose=verbose)


def _read_sequences(args) -> list:
    with open(args.input, 'r', encoding='utf-8') as f:
        lines = [line.rstrip('\n') for line in f]

    if args.int_tokens:
        return [np.array([int(t) for t in line.split()], dtype=np.int64)
                for line in lines]
    return [line.split() for line in lines]


def cmd_vectorize(args):
    vec = _load_vectorizer(args.config, args.verbose)
    sequences = _read_sequences(args)

    start = time.time()
    result = vec.transform_batch(sequences)
    elapsed = time.time() - start

    if args.output:
        np.save(args.output, result)
        print(f"Wrote {result.shape[0]} x {result.shape[1]} matrix to {args.output}")
    else:
        for row in result:
            print(" ".join(f"{v:g}" for v in row))

    if args.verbose:
        print(f"Time: {elapsed:.3f}s", file=sys.stderr)


def cmd_inspect(args):
    vec = _load_vectorizer(args.config, args.verbose)
    vocab = vec.vocabulary
    print(f"Mode: {vec.mode}")
    print(f"Token kind: {vocab.token_kind}")
    print(f"N-grams: {len(vocab)} ({format_class_counts(vocab.class_counts())})")
    print(f"Output slots: {vec.num_slots}")
    min_size = vec.min_gram_length if vec.all_sizes else vec.max_gram_length
    print(f"Sizes: {min_size}-{vec.max_gram_length}")
    print(f"Max skip: {vec.max_skip_count}")
    print(f"Weights: {'yes' if vocab.weights is not None else 'no'}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description=(
            "N-gram vectorizer: matches contiguous and skip-spaced "
            "n-grams against a fixed dictionary and emits TF, IDF or "
            "TFIDF feature vectors."
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # vectorize
    p_vec = sub.add_parser(
        "vectorize",
        help="Vectorize one token sequence per input line",
    )
    p_vec.add_argument("config", help="JSON vectorizer config")
    p_vec.add_argument("input", help="Input file, one sequence per line")
    p_vec.add_argument(
        "-o", "--output",
        help="Write the result matrix to this .npy file (default: print rows)",
    )
    p_vec.add_argument(
        "--int-tokens", action="store_true",
        help="Parse whitespace-separated tokens as integers",
    )
    p_vec.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print vocabulary summary and timing to stderr",
    )
    p_vec.set_defaults(func=cmd_vectorize)

    # inspect
    p_ins = sub.add_parser(
        "inspect",
        help="Show vocabulary statistics for a config",
    )
    p_ins.add_argument("config", help="JSON vectorizer config")
    p_ins.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print vocabulary summary to stderr",
    )
    p_ins.set_defaults(func=cmd_inspect)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
