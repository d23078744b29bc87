"""Tests for the archive fallbacks."""

import json

import pytest

from gitversion.archive import (
    archive_info_path,
    branch_from_refnames,
    read_archive_version_info,
    read_export_info,
    write_archive_version_info,
)


class TestReadExportInfo:
    """Test cases for read_export_info."""

    def test_missing_file(self, tmp_path):
        assert read_export_info(tmp_path) is None

    def test_substituted_file(self, tmp_path):
        (tmp_path / ".git_archival.txt").write_text(
            "node: 0123456789abcdef0123456789abcdef01234567\n"
            "node-short: 0123456\n"
            "node-date: 2024-12-02T10:00:00+01:00\n"
            "ref-names: HEAD -> master, tag: v1.0, origin/master\n",
            encoding="utf-8",
        )

        info = read_export_info(tmp_path)

        assert info is not None
        assert info.fullhash == "0123456789abcdef0123456789abcdef01234567"
        assert info.shorthash == "0123456"
        assert info.refnames == "HEAD -> master, tag: v1.0, origin/master"

    def test_short_hash_from_full_hash(self, tmp_path):
        (tmp_path / ".git_archival.txt").write_text(
            "node: 0123456789abcdef0123456789abcdef01234567\n", encoding="utf-8"
        )

        info = read_export_info(tmp_path)

        assert info is not None
        assert info.shorthash == "0123456"
        assert info.refnames == ""

    def test_unsubstituted_file(self, tmp_path):
        (tmp_path / ".git_archival.txt").write_text(
            "node: $Format:%H$\nnode-short: $Format:%h$\nref-names: $Format:%D$\n",
            encoding="utf-8",
        )

        assert read_export_info(tmp_path) is None

    def test_file_without_node(self, tmp_path):
        (tmp_path / ".git_archival.txt").write_text(
            "ref-names: HEAD -> master\n", encoding="utf-8"
        )

        assert read_export_info(tmp_path) is None


class TestBranchFromRefnames:
    """Test cases for branch_from_refnames."""

    @pytest.mark.parametrize(
        "refnames,expected",
        [
            ("HEAD -> develop, origin/develop", ("develop", False)),
            ("HEAD -> master, origin/master", ("master", True)),
            ("HEAD -> release/1.2", ("release/1.2", False)),
            ("HEAD, tag: v1.2.0, origin/master, master", ("master", True)),
            ("HEAD, tag: v1.2.0, origin/develop", ("origin/develop", False)),
            ("HEAD, master, origin/feature", ("origin/feature", False)),
            ("HEAD, tag: v1.2.0", ("unknown", False)),
            ("", ("unknown", False)),
        ],
    )
    def test_refnames(self, refnames, expected):
        assert branch_from_refnames(refnames, "master") == expected

    def test_custom_master_branch(self):
        assert branch_from_refnames("HEAD -> main", "main") == ("main", True)


class TestArchiveVersionInfo:
    """Test cases for the archive version snapshot."""

    def test_write_then_read(self, sample_info, tmp_path):
        path = write_archive_version_info(sample_info, tmp_path, "example")

        assert path == tmp_path / ".gitversion" / "example.json"
        assert read_archive_version_info(tmp_path, "example") == sample_info

    def test_snapshot_is_plain_json(self, sample_info, tmp_path):
        path = write_archive_version_info(sample_info, tmp_path, "example")

        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["version_string"] == "1.2.3-dirty"
        assert data["version_isdirty"] is True
        assert data["success"] is True

    def test_missing_snapshot(self, tmp_path):
        assert read_archive_version_info(tmp_path, "example") is None

    def test_snapshot_per_prefix(self, sample_info, tmp_path):
        write_archive_version_info(sample_info, tmp_path, "example")

        assert read_archive_version_info(tmp_path, "example_lib") is None

    def test_invalid_snapshot(self, tmp_path):
        """❌ A corrupt snapshot is ignored instead of failing the build."""
        path = archive_info_path(tmp_path, "example")
        path.parent.mkdir(parents=True)
        path.write_text('{"version_string": "1.0"}', encoding="utf-8")

        assert read_archive_version_info(tmp_path, "example") is None
