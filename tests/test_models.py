"""Tests for data models."""

import pytest
from pydantic import ValidationError

from gitversion.models import ExportInfo, VersionInfo


class TestVersionInfo:
    """Tests for the VersionInfo model."""

    def test_creation_with_all_fields(self, sample_info) -> None:
        """✅ Test creating VersionInfo with all fields populated."""
        assert sample_info.version_string == "1.2.3-dirty"
        assert sample_info.version_branch == "main"
        assert sample_info.version_fullhash == "abcdef1234567890"
        assert sample_info.version_shorthash == "abcdef1"
        assert sample_info.version_isdirty is True
        assert sample_info.version_distance == 5
        assert sample_info.version_flag == "debug"
        assert sample_info.success is True

    def test_is_frozen(self, sample_info) -> None:
        """❌ Test that fields cannot be changed after creation."""
        with pytest.raises(ValidationError):
            sample_info.version_string = "9.9"

        assert sample_info.version_string == "1.2.3-dirty"

    def test_negative_distance_rejected(self) -> None:
        """❌ Test that the commit distance cannot be negative."""
        with pytest.raises(ValidationError):
            VersionInfo(
                version_string="1.0",
                version_branch="master",
                version_fullhash="abc",
                version_shorthash="abc",
                version_distance=-1,
            )

    @pytest.mark.parametrize(
        "missing_field",
        ["version_string", "version_branch", "version_fullhash", "version_shorthash"],
    )
    def test_missing_required_fields(self, missing_field: str) -> None:
        """❌ Test that ValidationError is raised when required fields are missing."""
        data = {
            "version_string": "1.0",
            "version_branch": "master",
            "version_fullhash": "abc",
            "version_shorthash": "abc",
        }
        del data[missing_field]

        with pytest.raises(ValidationError):
            VersionInfo(**data)

    def test_unknown_defaults(self) -> None:
        info = VersionInfo.unknown()

        assert info.version_string == "0.0-unknown.0"
        assert info.version_branch == "unknown"
        assert info.version_fullhash == "unknown"
        assert info.version_shorthash == "unknown"
        assert info.version_flag == "unknown"
        assert info.version_isdirty is False
        assert info.version_distance == 0
        assert info.success is False

    def test_json_round_trip_keeps_types(self, sample_info) -> None:
        """✅ Test that a JSON snapshot restores booleans and integers."""
        restored = VersionInfo.model_validate_json(sample_info.model_dump_json())

        assert restored == sample_info
        assert restored.version_isdirty is True
        assert restored.version_distance == 5


class TestExportInfo:
    """Tests for the ExportInfo model."""

    def test_substituted(self) -> None:
        info = ExportInfo(fullhash="abcdef1234567890", shorthash="abcdef1")
        assert info.substituted is True

    @pytest.mark.parametrize(
        "fullhash,shorthash",
        [
            ("$Format:%H$", "$Format:%h$"),
            ("abcdef1234567890", "$Format:%h$"),
        ],
    )
    def test_not_substituted(self, fullhash, shorthash) -> None:
        """❌ Placeholders left by a plain copy of the source tree."""
        assert ExportInfo(fullhash=fullhash, shorthash=shorthash).substituted is False
