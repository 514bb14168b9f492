"""Tests for the command-line interface."""

import json

import numpy as np
import pytest

from cli import main


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "mode": "TF",
        "min_gram_length": 1,
        "max_gram_length": 2,
        "all": True,
        "pool_strings": ["a", "b", "a", "b"],
        "ngram_counts": [0, 2],
        "ngram_indexes": [0, 1, 2],
    }))
    return path


@pytest.fixture
def int_config_path(tmp_path):
    path = tmp_path / "int_config.json"
    path.write_text(json.dumps({
        "mode": "IDF",
        "pool_int64s": [5, 7],
        "ngram_counts": [0],
        "ngram_indexes": [0, 1],
        "weights": [0.5, 2.0],
    }))
    return path


def test_vectorize_prints_rows(tmp_path, config_path, capsys):
    inp = tmp_path / "input.txt"
    inp.write_text("a b a\nb b\n")
    main(["vectorize", str(config_path), str(inp)])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["2 1 1", "0 2 0"]


def test_vectorize_writes_npy(tmp_path, config_path):
    inp = tmp_path / "input.txt"
    inp.write_text("a b\n")
    out = tmp_path / "out.npy"
    main(["vectorize", str(config_path), str(inp), "-o", str(out)])
    result = np.load(out)
    assert result.dtype == np.float32
    np.testing.assert_array_equal(result, [[1.0, 1.0, 1.0]])


def test_vectorize_int_tokens(tmp_path, int_config_path, capsys):
    inp = tmp_path / "input.txt"
    inp.write_text("5 5 9\n7\n")
    main(["vectorize", str(int_config_path), str(inp), "--int-tokens"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["0.5 0", "0 2"]


def test_inspect(config_path, capsys):
    main(["inspect", str(config_path)])
    out = capsys.readouterr().out
    assert "Mode: TF" in out
    assert "N-grams: 3 (1-grams: 2, 2-grams: 1)" in out
    assert "Output slots: 3" in out
    assert "Weights: no" in out


def test_invalid_config_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({
        "mode": "TF",
        "pool_int64s": [10, 20, 10, 20],
        "ngram_counts": [0, 0],
        "ngram_indexes": [0, 1],
        "max_gram_length": 2,
    }))
    with pytest.raises(ValueError, match="Duplicate"):
        main(["inspect", str(path)])
