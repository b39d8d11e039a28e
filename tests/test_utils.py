"""Unit tests for utility functions (hozokit_generator.utils).

Tests cover:
- dashify / snakify / format_tags
- ensure_dir
- read_version_marker
- format_duration
- Rich output helpers (print_banner, print_error, print_warning, ...)
"""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console
from rich.progress import Progress

from hozokit_generator.utils import (
    create_progress,
    dashify,
    ensure_dir,
    format_duration,
    format_tags,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    read_version_marker,
    snakify,
)


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


class TestDashify:
    @pytest.mark.unit
    def test_spaces_become_dashes(self):
        assert dashify("Hozokit Generator Project") == "hozokit-generator-project"

    @pytest.mark.unit
    def test_lowercases(self):
        assert dashify("MyTheme") == "mytheme"

    @pytest.mark.unit
    def test_custom_target_and_separator(self):
        assert dashify("a_b_c", target="_", separator=".") == "a.b.c"

    @pytest.mark.unit
    def test_only_target_is_replaced(self):
        assert dashify("My  Theme!") == "my--theme!"


class TestSnakify:
    @pytest.mark.unit
    def test_spaces_become_underscores(self):
        assert snakify("Super Awesome Component") == "super_awesome_component"

    @pytest.mark.unit
    def test_single_word(self):
        assert snakify("Hero") == "hero"


class TestFormatTags:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("blog ,portfolio", "blog, portfolio"),
            ("one-column", "one-column"),
            (" a , , b ", "a, b"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalises(self, raw, expected):
        assert format_tags(raw) == expected


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_existing_is_fine(self, tmp_path: Path):
        assert ensure_dir(str(tmp_path)) == tmp_path


class TestReadVersionMarker:
    @pytest.mark.unit
    def test_strips_whitespace(self, tmp_path: Path):
        marker = tmp_path / ".nvmrc"
        marker.write_text("  v14.15.1\n")
        assert read_version_marker(marker) == "v14.15.1"

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path):
        assert read_version_marker(tmp_path / ".nvmrc") is None

    @pytest.mark.unit
    def test_empty_file(self, tmp_path: Path):
        marker = tmp_path / ".nvmrc"
        marker.write_text("\n")
        assert read_version_marker(marker) is None


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_print_banner(self, out: Console):
        print_banner("Hozokit", "Theme generator", out)
        text = out.export_text()
        assert "Hozokit" in text
        assert "Theme generator" in text

    @pytest.mark.unit
    def test_print_error_prefix(self, out: Console):
        print_error("Download has failed.", out)
        assert "Error: Download has failed." in out.export_text()

    @pytest.mark.unit
    def test_print_warning_prefix(self, out: Console):
        print_warning("Node mismatch", out)
        assert "Warning: Node mismatch" in out.export_text()

    @pytest.mark.unit
    def test_markup_in_message_is_printed_literally(self, out: Console):
        print_success("Created [bold]theme[/bold]", out)
        assert "Created [bold]theme[/bold]" in out.export_text()

    @pytest.mark.unit
    def test_print_summary_table(self, out: Console):
        print_summary_table({"Theme": "my-theme"}, title="Project", out=out)
        text = out.export_text()
        assert "Project" in text
        assert "my-theme" in text

    @pytest.mark.unit
    def test_create_progress(self, out: Console):
        progress = create_progress(out)
        assert isinstance(progress, Progress)
        assert progress.console is out
