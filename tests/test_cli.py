"""
Command-line query tool tests.
"""

import io

import pytest

from wordvec.cli import main, format_results, run_query, serve
from wordvec.vector import VectorTable, WordDistance, save_vectors, UnknownWordError


@pytest.fixture
def vectors_file(tmp_path):
    """Write a small vector file and return its path."""
    path = tmp_path / "vectors.bin"
    save_vectors({
        "cat": [0.6, 0.8],
        "dog": [0.8, 0.6],
        "fish": [1.0, 0.0],
    }, path)
    return path


@pytest.fixture
def royalty_file(tmp_path):
    path = tmp_path / "royalty.bin"
    save_vectors({
        "man": [1.0, 0.0, 0.0],
        "woman": [0.0, 0.0, 1.0],
        "king": [1.0, 1.0, 0.0],
        "queen": [0.0, 1.0, 1.0],
        "prince": [0.0, 1.0, 0.0],
    }, path)
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["WORDVEC_VECTORS_PATH", "WORDVEC_TOP_K", "WORDVEC_REJECT_DEGENERATE",
                 "WORDVEC_ENCODING", "WORDVEC_LOG_LEVEL", "DEBUG"]:
        monkeypatch.delenv(name, raising=False)


def test_format_results():
    results = [WordDistance("dog", 0.96), WordDistance("fish", 0.6)]
    assert format_results(results) == "dog 0.960000\nfish 0.600000"


def test_run_query_dispatch():
    """Test that one word runs distance and three run analogy."""
    table = VectorTable.from_vectors({"a": [1.0, 0.0], "b": [0.0, 1.0], "c": [1.0, 1.0], "d": [1.0, -1.0]})

    assert "a" not in [r.word for r in run_query(table, ["a"], 5)]
    assert len(run_query(table, ["a", "b", "c"], 5)) == 1
    with pytest.raises(ValueError):
        run_query(table, ["a", "b"], 5)


def test_one_shot_distance(capsys, vectors_file):
    """Test a single distance query from the command line."""
    assert main(["--vectors", str(vectors_file), "--limit", "2", "cat"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["dog 0.960000", "fish 0.600000"]


def test_one_shot_analogy(capsys, royalty_file):
    assert main(["-f", str(royalty_file), "-n", "1", "man", "king", "woman"]) == 0

    captured = capsys.readouterr()
    assert captured.out.split()[0] == "queen"


def test_one_shot_unknown_word(capsys, vectors_file):
    """Test that an unknown word exits with status 1."""
    assert main(["--vectors", str(vectors_file), "bird"]) == 1

    captured = capsys.readouterr()
    assert "Unknown word: bird" in captured.err
    assert captured.out == ""


def test_wrong_word_count_is_usage_error(vectors_file):
    with pytest.raises(SystemExit) as exc_info:
        main(["--vectors", str(vectors_file), "cat", "dog"])
    assert exc_info.value.code == 2


def test_limit_from_environment(capsys, monkeypatch, vectors_file):
    """Test that WORDVEC_TOP_K sets the default limit."""
    monkeypatch.setenv("WORDVEC_TOP_K", "1")
    assert main(["--vectors", str(vectors_file), "cat"]) == 0
    assert capsys.readouterr().out.splitlines() == ["dog 0.960000"]


def test_vectors_path_from_environment(capsys, monkeypatch, vectors_file):
    monkeypatch.setenv("WORDVEC_VECTORS_PATH", str(vectors_file))
    assert main(["fish"]) == 0
    assert capsys.readouterr().out.splitlines()[0].startswith("dog ")


def test_interactive_loop(capsys, monkeypatch, vectors_file):
    """Test answering one query per stdin line until EOF."""
    monkeypatch.setattr("sys.stdin", io.StringIO("cat\n\nbird\n  fish  \n"))

    assert main(["--vectors", str(vectors_file), "--limit", "1"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["dog 0.960000", "dog 0.800000"]
    assert "Unknown word: bird" in captured.err


def test_interactive_analogy_loop(capsys, monkeypatch, royalty_file):
    monkeypatch.setattr("sys.stdin", io.StringIO("man king woman\nman king\n"))

    assert main(["--vectors", str(royalty_file), "--analogy", "--limit", "1"]) == 0

    captured = capsys.readouterr()
    assert captured.out.split()[0] == "queen"
    assert "Expected three words, got 2" in captured.err


def test_serve_counts_answered_queries():
    table = VectorTable.from_vectors({"cat": [0.6, 0.8], "dog": [0.8, 0.6]})
    out, err = io.StringIO(), io.StringIO()

    answered = serve(table, 5, False, io.StringIO("cat\nbird\ndog\n"), out, err)

    assert answered == 2
    assert out.getvalue().splitlines() == ["dog 0.960000", "cat 0.960000"]
    assert err.getvalue() == str(UnknownWordError("bird")) + "\n"


def test_missing_vectors_file(capsys, tmp_path):
    """Test that a load failure exits with status 1."""
    assert main(["--vectors", str(tmp_path / "missing.bin"), "cat"]) == 1
    assert "Failed to load vectors" in capsys.readouterr().err


def test_truncated_vectors_file(capsys, tmp_path):
    path = tmp_path / "bad.bin"
    path.write_bytes(b"2 2\ncat ")
    assert main(["--vectors", str(path), "cat"]) == 1
    assert "Failed to load vectors" in capsys.readouterr().err


def test_reject_degenerate_flag(capsys, tmp_path):
    """Test that --reject-degenerate turns a zero vector into a load failure."""
    path = tmp_path / "zero.bin"
    save_vectors({"cat": [1.0, 0.0], "zero": [0.0, 0.0]}, path)

    assert main(["--vectors", str(path), "cat"]) == 0
    capsys.readouterr()

    assert main(["--vectors", str(path), "--reject-degenerate", "cat"]) == 1
    assert "Zero-norm vector for word: zero" in capsys.readouterr().err


def test_invalid_config(capsys, monkeypatch, vectors_file):
    monkeypatch.setenv("WORDVEC_TOP_K", "many")
    assert main(["--vectors", str(vectors_file), "cat"]) == 2
    assert "Invalid WORDVEC_TOP_K: many" in capsys.readouterr().err
