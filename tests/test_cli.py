from __future__ import annotations

import csv
import json
import textwrap
from pathlib import Path

from toc_engine.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


DOCUMENT = """
    # Intro
    ## Setup
    ### Install
    ## Usage
    """


def test_cli_prints_toc(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.stdout == (
        "- [Intro](#intro)\n"
        "  - [Setup](#setup)\n"
        "    - [Install](#install)\n"
        "  - [Usage](#usage)\n"
    )


def test_cli_numbered_without_links(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, ["--format", "numbered", "--no-links", str(target)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1. Intro", "  1.1. Setup", "    1.1.1. Install", "  1.2. Usage"]


def test_cli_applies_depth_and_style_overrides(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(
        cli,
        [
            "--min-depth",
            "2",
            "--bullet-style",
            "asterisk",
            "--indent-style",
            "tabs",
            "--case-style",
            "uppercase",
            "--anchor-prefix",
            "x-",
            str(target),
        ],
    )

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "* [SETUP](#x-setup)",
        "\t* [INSTALL](#x-install)",
        "* [USAGE](#x-usage)",
    ]


def test_cli_reads_pyproject_settings(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.toc-engine]
        format = "plain"
        max_depth = 2
        """,
    )
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Intro", "  Setup", "  Usage"]


def test_cli_template_is_overridden_by_options(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, ["--template", "compact", "--max-depth", "1", str(target)])

    assert result.exit_code == 0
    assert result.stdout == "* [Intro](#intro)\n"


def test_cli_rejects_inverted_depth_window(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, ["--min-depth", "4", "--max-depth", "2", str(target)])

    assert result.exit_code == 2
    assert "`max_depth` must be >= `min_depth`" in result.output
    assert result.stdout == ""


def test_cli_prepend_outputs_document(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "# Title\n\nBody\n")

    result = cli_runner.invoke(cli, ["--prepend", str(target)])

    assert result.exit_code == 0
    assert result.stdout == "- [Title](#title)\n\n# Title\n\nBody\n"


def test_cli_stats_printed_to_stderr(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "# Setup\n# Setup\n## Next\n")

    result = cli_runner.invoke(cli, ["--stats", str(target)])

    assert result.exit_code == 0
    statistics = json.loads(result.stderr)
    assert statistics["total_headings"] == 3
    assert statistics["headings_by_level"] == {"1": 2, "2": 1}
    assert statistics["duplicate_anchors"] == ["setup"]


def test_cli_empty_document_prints_empty_line(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "empty.md", "no headings\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.stdout == "\n"


def test_cli_processes_batch_and_writes_csv(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = _write(tmp_path, "first.md", "# One\n## Two\n")
    second = _write(tmp_path, "second.markdown", "# Dup\n# Dup\n")
    stats_path = tmp_path / "stats.csv"

    result = cli_runner.invoke(cli, ["--stats-csv", str(stats_path), str(first), str(second)])

    assert result.exit_code == 0
    assert f"==> {first} <==" in result.stdout
    assert f"==> {second} <==" in result.stdout
    with open(stats_path, encoding="utf-8", newline="") as stream:
        rows = list(csv.reader(stream))
    assert rows[0][0] == "Filename"
    assert [row[0] for row in rows[1:]] == ["first.md", "second.markdown"]
    assert rows[1][2:4] == ["2", "2"]
    assert rows[2][5] == "1"
    assert rows[2][-1] == "completed"


def test_cli_continues_after_failed_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    good = _write(tmp_path, "good.md", "# Good\n")
    bad = _write(tmp_path, "image.png", "# Not markdown\n")
    stats_path = tmp_path / "stats.csv"

    result = cli_runner.invoke(cli, ["--stats-csv", str(stats_path), str(bad), str(good)])

    assert result.exit_code == 1
    assert "not a Markdown file" in result.stderr
    assert "- [Good](#good)" in result.stdout
    assert "1 of 2 file(s) failed" in result.stderr
    with open(stats_path, encoding="utf-8", newline="") as stream:
        rows = list(csv.reader(stream))
    assert [row[-1] for row in rows[1:]] == ["error", "completed"]


def test_cli_enforces_max_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TOC_ENGINE_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "big.md", "# A heading that is too long\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 4 bytes" in result.stderr


def test_cli_rejects_invalid_max_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TOC_ENGINE_MAX_FILE_SIZE", "lots")
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "Invalid value for TOC_ENGINE_MAX_FILE_SIZE" in result.output


def test_cli_reports_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "latin1.md"
    target.write_bytes("# Caf\xe9\n".encode("latin-1"))

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "Invalid UTF-8 sequence" in result.stderr


def test_cli_uses_config_nearest_to_each_document(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.toc-engine]
        max_depth = 9
        """,
    )
    docs = tmp_path / "docs"
    docs.mkdir()
    _write_pyproject(
        docs,
        """
        [tool.toc-engine]
        max_depth = 1
        """,
    )
    target = _write(docs, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.stdout == "- [Intro](#intro)\n"


def test_cli_reports_invalid_document_config_as_file_failure(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.toc-engine]
        max_depth = 9
        """,
    )
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "max_depth" in result.stderr
    assert "1 of 1 file(s) failed" in result.stderr


def test_cli_writes_outputs_to_directory(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = _write(tmp_path, "first.md", "# One\n")
    second = _write(tmp_path, "second.markdown", "# Two\n")
    out = tmp_path / "out"
    out.mkdir()

    result = cli_runner.invoke(
        cli, ["--format", "json", "--output-dir", str(out), str(first), str(second)]
    )

    assert result.exit_code == 0
    assert f"Wrote {out / 'first-toc.json'}" in result.stdout
    assert json.loads((out / "first-toc.json").read_text(encoding="utf-8"))[0]["text"] == "One"
    assert json.loads((out / "second-toc.json").read_text(encoding="utf-8"))[0]["anchor"] == "two"
    assert "[" not in result.stdout
