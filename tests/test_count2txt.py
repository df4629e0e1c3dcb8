"""Tests for dfrbrowser/count2txt.py: wordcount CSV to bag-of-words text."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from dfrbrowser.count2txt import app, bag_of_words, output_path, read_wordcounts
from dfrbrowser.errors import ConversionError, WordcountFormatError

runner = CliRunner()

DOG_CAT = "WORDCOUNTS,WEIGHT\ndog,2\ncat,1\n"


@pytest.fixture
def wordcounts(tmp_path):
    path = tmp_path / "wordcounts_10.2307_1.CSV"
    path.write_text(DOG_CAT)
    return path


# ── Reading ────────────────────────────────────────────────────────────────────


class TestReadWordcounts:
    def test_rows_in_file_order(self, wordcounts):
        assert read_wordcounts(wordcounts) == [("dog", 2), ("cat", 1)]

    def test_bad_header(self, tmp_path):
        path = tmp_path / "w.csv"
        path.write_text("WORD,COUNT\ndog,2\n")
        with pytest.raises(WordcountFormatError, match="unexpected header"):
            read_wordcounts(path)

    def test_bad_row(self, tmp_path):
        path = tmp_path / "w.csv"
        path.write_text("WORDCOUNTS,WEIGHT\ndog,two\n")
        with pytest.raises(WordcountFormatError, match=":2:"):
            read_wordcounts(path)

    def test_unreadable_file_is_fatal(self, tmp_path):
        with pytest.raises(ConversionError):
            read_wordcounts(tmp_path / "absent.csv")

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / "w.csv"
        path.write_bytes(b"WORDCOUNTS,WEIGHT\r\ndog,2\r\n")
        assert read_wordcounts(path) == [("dog", 2)]


class TestBagOfWords:
    def test_repeats_each_word(self):
        assert bag_of_words([("dog", 2), ("cat", 1)]) == "dog dog cat"

    def test_zero_count_drops_word(self):
        assert bag_of_words([("dog", 0), ("cat", 1)]) == "cat"


# ── CLI ────────────────────────────────────────────────────────────────────────


class TestCli:
    def test_one_line_per_file(self, wordcounts):
        result = runner.invoke(app, [str(wordcounts)])
        assert result.exit_code == 0
        assert "wordcounts_10.2307_1.CSV X dog dog cat" in result.output

    def test_dry_run_writes_nothing(self, wordcounts):
        result = runner.invoke(app, ["--dry-run", "--multifile", str(wordcounts)])
        assert result.exit_code == 0
        assert not output_path(wordcounts).exists()
        assert "dog dog cat" not in result.output

    def test_dry_run_prints_no_body(self, wordcounts):
        result = runner.invoke(app, ["-n", str(wordcounts)])
        assert result.exit_code == 0
        assert "dog dog cat" not in result.output

    def test_multifile(self, wordcounts):
        result = runner.invoke(app, ["--multifile", str(wordcounts)])
        assert result.exit_code == 0
        out = wordcounts.with_name("wordcounts_10.2307_1.txt")
        assert out.read_text() == "dog dog cat\n"
        assert "dog dog cat" not in result.output

    def test_multifile_output_dir(self, wordcounts, tmp_path):
        out_dir = tmp_path / "txt"
        out_dir.mkdir()
        result = runner.invoke(
            app, ["--multifile", "--output-dir", str(out_dir), str(wordcounts)]
        )
        assert result.exit_code == 0
        assert (out_dir / "wordcounts_10.2307_1.txt").exists()

    def test_existing_output_is_kept(self, wordcounts):
        out = output_path(wordcounts)
        out.write_text("old\n")
        result = runner.invoke(app, ["--multifile", str(wordcounts)])
        assert result.exit_code == 0
        assert out.read_text() == "old\n"

    def test_skips_bad_files_and_continues(self, wordcounts, tmp_path):
        not_csv = tmp_path / "notes.txt"
        not_csv.write_text("hello\n")
        bad_header = tmp_path / "bad.csv"
        bad_header.write_text("WORD,COUNT\n")
        missing = tmp_path / "missing.csv"

        result = runner.invoke(
            app, [str(not_csv), str(bad_header), str(missing), str(wordcounts)]
        )
        assert result.exit_code == 0
        assert "X dog dog cat" in result.output
        assert "bad.csv X" not in result.output

    def test_non_utf8_file_skipped(self, wordcounts, tmp_path):
        latin1 = tmp_path / "latin1.csv"
        latin1.write_bytes(b"WORDCOUNTS,WEIGHT\ncaf\xe9,2\n")

        result = runner.invoke(app, [str(latin1), str(wordcounts)])
        assert result.exit_code == 0
        assert result.exception is None
        assert "wordcounts_10.2307_1.CSV X dog dog cat" in result.output

    def test_dry_run_logs_counts(self, wordcounts, caplog):
        result = runner.invoke(app, ["-n", str(wordcounts)])
        assert result.exit_code == 0
        assert "wordcounts_10.2307_1.CSV: 2 words, 3 tokens" in caplog.messages

    def test_quiet_keeps_warnings_only(self, wordcounts, tmp_path, caplog):
        bad_header = tmp_path / "bad.csv"
        bad_header.write_text("WORD,COUNT\n")

        result = runner.invoke(app, ["-q", str(bad_header), str(wordcounts)])
        assert result.exit_code == 0
        assert "X dog dog cat" in result.output
        levels = {r.levelname for r in caplog.records if r.name.startswith("dfrbrowser")}
        assert levels == {"WARNING"}
        assert any("unexpected header" in m for m in caplog.messages)

    def test_unwritable_output_dir_is_fatal(self, wordcounts, tmp_path):
        result = runner.invoke(
            app,
            ["--multifile", "--output-dir", str(tmp_path / "nowhere"), str(wordcounts)],
        )
        assert result.exit_code == 1
