# tests/test_main.py
import logging

import pytest

from sparsematrix import sparsematrix
from sparsematrix.__main__ import fill_diagonals, load_cells, main

DIAGONAL_FRAGMENT = [
    "1 0 0 0 0 0 0 8",
    "0 2 0 0 0 0 7 0",
    "0 0 3 0 0 6 0 0",
    "0 0 0 4 5 0 0 0",
    "0 0 0 4 5 0 0 0",
    "0 0 3 0 0 6 0 0",
    "0 2 0 0 0 0 7 0",
    "1 0 0 0 0 0 0 8",
]


def test_fill_diagonals():
    """Test that both diagonals hold their column index, minus the two zero cells."""
    m = sparsematrix(default=0)
    fill_diagonals(m, 10)

    assert m.size() == 18
    assert m.at(0, 9) == 9
    assert m.at(9, 9) == 9
    assert (0, 0) not in m
    assert (9, 0) not in m


def test_main_default_run(capsys):
    """Test the default demo output: the 8x8 fragment, then the cell count."""
    assert main([]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [*DIAGONAL_FRAGMENT, "18"]


def test_main_lists_cells(capsys):
    """Test that --cells lists every occupied cell in row-major order."""
    assert main(["--cells"]) == 0

    lines = capsys.readouterr().out.splitlines()
    cells = lines[len(DIAGONAL_FRAGMENT) + 1 :]
    assert len(cells) == 18
    assert cells[0] == "[0][9] = 9"
    assert cells[1] == "[1][1] = 1"
    assert cells[-1] == "[9][9] = 9"


def test_main_verbose_logs_removals(caplog):
    """Test that --verbose surfaces the debug messages for dropped cells."""
    with caplog.at_level(logging.DEBUG, logger="sparsematrix"):
        assert main(["--verbose", "--size", "4"]) == 0

    assert "remove 0:0 value" in caplog.text


def test_main_reads_input_file(tmp_path, capsys):
    """Test loading cells from a tab-separated file, skipping blank lines."""
    source = tmp_path / "cells.tsv"
    source.write_text("0\t0\t5\n\n2\t3\t7\r\n")

    assert main(["--input", str(source), "--size", "4", "--cells"]) == 0

    assert capsys.readouterr().out.splitlines() == ["0 0", "0 0", "2", "[0][0] = 5", "[2][3] = 7"]


@pytest.mark.parametrize(
    "content, message",
    [
        ("1 2 3\n", "line 1: invalid \\t count, expected 2, line has 0"),
        ("0\t0\t1\nx\t1\t2\n", "line 2: invalid literal for int()"),
    ],
    ids=["missing_tabs", "not_an_int"],
)
def test_main_bad_input(tmp_path, capsys, content, message):
    """Test that malformed input is reported on stderr with exit status 1."""
    source = tmp_path / "cells.tsv"
    source.write_text(content)

    assert main(["--input", str(source)]) == 1

    assert message in capsys.readouterr().err


def test_load_cells_respects_default():
    """Test that loaded values equal to the default are dropped at compaction."""
    m = sparsematrix(default=-1)
    load_cells(m, ["0\t0\t-1", "1\t1\t4"])

    assert m.size() == 1
    assert (m.rows(), m.cols()) == (2, 2)


def test_main_missing_input_file(tmp_path, capsys):
    """Test that an unreadable input file is reported on stderr with exit status 1."""
    missing = tmp_path / "missing.tsv"

    assert main(["--input", str(missing)]) == 1

    captured = capsys.readouterr()
    assert "missing.tsv" in captured.err
    assert captured.out == ""


@pytest.mark.parametrize(
    "level, expected_calls",
    [(logging.WARNING, 1), (logging.DEBUG, 2)],
    ids=["quiet", "debug"],
)
def test_main_sizes_matrix_once_unless_debugging(monkeypatch, caplog, level, expected_calls):
    """Test that the debug cell count is only computed when debug logging is on."""
    calls = []
    original_size = sparsematrix.size

    def counting_size(self):
        calls.append(1)
        return original_size(self)

    monkeypatch.setattr(sparsematrix, "size", counting_size)

    with caplog.at_level(level, logger="sparsematrix"):
        assert main(["--size", "4"]) == 0

    assert len(calls) == expected_calls
