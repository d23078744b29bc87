"""Data models for gitversion."""

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN = "unknown"


class VersionInfo(BaseModel):
    """
    Version metadata of a git checkout, fixed at build time.

    Instances are frozen: once generated, the metadata never changes for the
    lifetime of the program that embeds it.
    """

    model_config = ConfigDict(frozen=True)

    version_string: str = Field(..., description="Composite version, e.g. '1.3-alpha.5'")
    version_branch: str = Field(..., description="Branch name at build time")
    version_fullhash: str = Field(..., description="Full commit hash")
    version_shorthash: str = Field(..., description="Abbreviated commit hash")
    version_isdirty: bool = Field(
        False, description="Working tree had uncommitted changes"
    )
    version_distance: int = Field(
        0, ge=0, description="Commits since the last tag (or reference point)"
    )
    version_flag: str = Field(
        "", description="Pre-release identifier, passed through unchanged"
    )

    version_major: int = Field(0, ge=0)
    version_minor: int = Field(0, ge=0)
    version_patch: int = Field(0, ge=0)
    success: bool = Field(
        False, description="True if both commit hashes were read from git"
    )

    @classmethod
    def unknown(cls) -> "VersionInfo":
        """Defaults used when no version information can be determined."""
        return cls(
            version_string="0.0-unknown.0",
            version_branch=UNKNOWN,
            version_fullhash=UNKNOWN,
            version_shorthash=UNKNOWN,
            version_flag=UNKNOWN,
        )


class ExportInfo(BaseModel):
    """Commit data substituted by `git archive` into an export-subst file."""

    model_config = ConfigDict(frozen=True)

    fullhash: str
    shorthash: str
    refnames: str = ""

    @property
    def substituted(self) -> bool:
        """False if git archive left the $Format:...$ placeholders untouched."""
        return not any(
            "$Format:" in value for value in (self.fullhash, self.shorthash)
        )
