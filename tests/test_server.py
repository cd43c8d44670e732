"""
Tests for the command-line entry point

These tests drive skvs.server.main() with argument lists and check its
printed output, exit status and the snapshot it leaves behind.

Run with: python -m pytest tests/test_server.py -v
"""

import json
import os

import pytest

from skvs.config.settings import settings
from skvs.server import main, parse_args
from skvs.store import Store


@pytest.mark.integration
class TestServerCommands:
    """Test commands run against a snapshot file."""

    def test_startup_without_command(self, snapshot_path: str, capsys):
        """Test the default run prints start time and listen address."""
        status = main(["-f", snapshot_path, "-a", "127.0.0.1:9000"])
        out = capsys.readouterr().out

        assert status == 0
        assert "started at" in out
        assert "listening on 127.0.0.1:9000" in out

    def test_insert_persists(self, snapshot_path: str, capsys):
        """Test insert prints its outcome and flushes the store."""
        status = main(["-f", snapshot_path, "insert", "D800", "Nikon"])

        assert status == 0
        assert "new entry inserted" in capsys.readouterr().out
        store = Store.load(snapshot_path)
        assert store.get("D800").value == "Nikon"
        assert store.metrics.last_write > 0

    def test_insert_existing_key(self, snapshot_path: str, capsys):
        """Test a rejected insert reports the key exists and exits 1."""
        main(["-f", snapshot_path, "insert", "D800", "Canon"])
        status = main(["-f", snapshot_path, "insert", "D800", "Nikon"])

        assert status == 1
        assert "key already exists" in capsys.readouterr().out
        assert Store.load(snapshot_path).get("D800").value == "Canon"

    def test_update_then_get(self, snapshot_path: str, capsys):
        """Test update bumps the version shown by get."""
        main(["-f", snapshot_path, "insert", "D800", "Canon"])
        assert main(["-f", snapshot_path, "update", "D800", "Nikon"]) == 0
        capsys.readouterr()

        status = main(["-f", snapshot_path, "get", "D800"])
        out = capsys.readouterr().out

        assert status == 0
        assert "Nikon" in out
        assert "version: 2" in out

    def test_get_missing_key(self, snapshot_path: str, capsys):
        """Test get on a missing key exits 1."""
        status = main(["-f", snapshot_path, "get", "missing"])
        assert status == 1
        assert "key doesn't exist" in capsys.readouterr().out

    def test_delete(self, snapshot_path: str, capsys):
        """Test delete removes the key from the snapshot."""
        main(["-f", snapshot_path, "insert", "EOS 5D Mark II", "Canon"])
        assert main(["-f", snapshot_path, "delete", "EOS 5D Mark II"]) == 0
        assert "entry was updated" in capsys.readouterr().out

        with open(snapshot_path, encoding="utf-8") as f:
            document = json.load(f)
        assert document["values"] == {}
        assert document["metrics"]["size"] == 0

        assert main(["-f", snapshot_path, "delete", "EOS 5D Mark II"]) == 1

    def test_stats(self, snapshot_path: str, capsys):
        """Test stats prints the metrics."""
        main(["-f", snapshot_path, "insert", "a", "b"])
        capsys.readouterr()

        assert main(["-f", snapshot_path, "stats"]) == 0
        out = capsys.readouterr().out
        assert f"path: {snapshot_path}" in out
        assert "size: 1" in out

    def test_in_memory_store(self, tmp_path, monkeypatch, capsys):
        """Test an empty file argument disables persistence."""
        monkeypatch.chdir(tmp_path)
        assert main(["-f", "", "insert", "a", "b"]) == 0
        assert list(tmp_path.iterdir()) == []

    def test_corrupt_snapshot(self, snapshot_path: str):
        """Test a corrupt snapshot exits 1 instead of raising."""
        with open(snapshot_path, "w", encoding="utf-8") as f:
            f.write("not json")
        assert main(["-f", snapshot_path, "get", "a"]) == 1

    def test_empty_value(self, snapshot_path: str):
        """Test an empty value exits 1 instead of raising."""
        assert main(["-f", snapshot_path, "insert", "a", ""]) == 1

    def test_unencodable_value(self, snapshot_path: str):
        """Test a value that cannot be written as UTF-8 exits 1."""
        assert main(["-f", snapshot_path, "insert", "a", "\udcff"]) == 1
        assert not os.path.exists(snapshot_path + ".tmp")


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        """Test defaults come from settings."""
        args = parse_args([])
        assert args.address == settings.ADDRESS
        assert args.file == settings.STORE_PATH
        assert args.command is None

    def test_missing_value(self):
        """Test insert without a value is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["insert", "key"])
        assert exc_info.value.code == 2
