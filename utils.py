"""Utility functions shared by the vectorizer and the CLI."""

import numpy as np


TOKEN_KIND_STR = "str"
TOKEN_KIND_INT = "int"

# numpy dtypes accepted as integer input (32- and 64-bit share one vocabulary).
INT_DTYPES = (np.dtype(np.int32), np.dtype(np.int64))


def pool_token_kind(pool) -> str:
    """Return the token kind of a homogeneous pool.

    Raises ValueError if the pool mixes strings and integers or holds
    anything else.
    """
    has_str = has_int = False
    for token in pool:
        if isinstance(token, str):
            has_str = True
        elif isinstance(token, (int, np.integer)) and not isinstance(token, bool):
            has_int = True
        else:
            raise ValueError(
                f"Unsupported pool token {token!r} of type {type(token).__name__}"
            )
    if has_str and has_int:
        raise ValueError("Pool must be all strings or all integers, not both")
    return TOKEN_KIND_STR if has_str else TOKEN_KIND_INT


def as_token_list(tokens) -> tuple[list, str]:
    """Flatten an input sequence into a list of Python tokens.

    Numpy arrays of any shape are flattened in C order; a 0-d array is a
    single token. Plain sequences are taken as-is.

    Returns:
        (tokens, kind) where kind is TOKEN_KIND_STR or TOKEN_KIND_INT,
        or None for an empty sequence.
    """
    if isinstance(tokens, np.ndarray):
        arr = tokens.reshape(-1)
        if arr.dtype in INT_DTYPES:
            return arr.tolist(), TOKEN_KIND_INT
        if arr.dtype.kind == 'U':
            return arr.tolist(), TOKEN_KIND_STR
        if arr.dtype.kind == 'O':
            items = arr.tolist()
            if all(isinstance(t, str) for t in items):
                return items, TOKEN_KIND_STR if items else None
        raise TypeError(f"Invalid type of the input argument: {arr.dtype}")

    items = list(tokens)
    if not items:
        return items, None
    if all(isinstance(t, str) for t in items):
        return items, TOKEN_KIND_STR
    if all(isinstance(t, (int, np.integer)) and not isinstance(t, bool)
           for t in items):
        return [int(t) for t in items], TOKEN_KIND_INT
    raise TypeError("Input tokens must be all strings or all integers")


def format_class_counts(class_counts: dict[int, int]) -> str:
    """Format per-size-class n-gram counts as a short summary string."""
    if not class_counts:
        return "empty"
    return ", ".join(
        f"{size}-grams: {count}" for size, count in sorted(class_counts.items())
    )
