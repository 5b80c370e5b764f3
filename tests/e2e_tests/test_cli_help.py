"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import subprocess

import tables_to_items


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert tables_to_items.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["tables-to-items", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Convert roll-table entries" in result.stdout


def test_cli_convert_missing_table_fails_cleanly() -> None:
    """Ensure CLI returns a user-facing validation error for a missing table."""
    result = subprocess.run(
        [
            "tables-to-items",
            "convert",
            "/tmp/definitely-missing-table.json",
            "--packs-dir",
            "/tmp",
            "--compendium",
            "loot",
        ],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode != 0
    assert "does not exist" in result.stderr.lower()
