"""Version information derived from git, following git-flow conventions.

Version number rules:

* master:         X.Y.Z[-DIST] from the last tag; DIST is normally 0 there.
* release/hotfix: X.Y.Z-rc.DIST, X.Y.Z taken from the branch name when it is
                  greater than the last tag. DIST counts from the closest
                  rc-X.Y.Z tag when one exists.
* anything else:  X.Y.Z-alpha.DIST with the minor number of the last tag
                  incremented.

A patch number of 0 is omitted from the version string (1.2.0 becomes 1.2).
"""

import re
from pathlib import Path
from typing import Literal

import sentry_sdk

from gitversion.archive import (
    branch_from_refnames,
    read_archive_version_info,
    read_export_info,
)
from gitversion.config import Settings
from gitversion.config import settings as default_settings
from gitversion.git import GitRepo
from gitversion.logging import logger
from gitversion.models import UNKNOWN, ExportInfo, VersionInfo

NOT_IN_REPO = "not-within-git-repo"
HOTFIX_FLAG = "hotfix"

Version = tuple[int, int, int]
BranchKind = Literal["master", "release", "hotfix", "other"]
FallbackType = Literal["release", "develop"]


def parse_tag_version(description: str, prefix: str) -> tuple[Version, int] | None:
    """
    Parse `git describe` output such as 'v1.2.3-5-gabc1234'.

    Args:
        description: Output of git describe
        prefix: Optional tag prefix (e.g. 'v')

    Returns:
        ((major, minor, patch), distance) or None if the tag is not a version
    """
    pattern = rf"^(?:{re.escape(prefix)})?(\d+)\.(\d+)(?:\.(\d+))?(?:-(\d+))?"
    match = re.match(pattern, description)
    if not match:
        return None
    major, minor, patch, distance = match.groups()
    return (int(major), int(minor), int(patch or 0)), int(distance or 0)


def parse_branch_version(branch: str, prefix: str) -> Version | None:
    """Version embedded in a branch name, e.g. 'release/0.8' -> (0, 8, 0)."""
    match = re.match(rf"^{re.escape(prefix)}\D*(\d+)\.(\d+)(?:\.(\d+))?", branch)
    if not match:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


def classify_branch(branch: str, cfg: Settings) -> BranchKind:
    if branch.startswith(cfg.rc_branch_prefix):
        return "release"
    if branch.startswith(cfg.hotfix_branch_prefix):
        return "hotfix"
    if branch == cfg.master_branch:
        return "master"
    return "other"


def format_version_string(
    major: int, minor: int, patch: int, flag: str, distance: int, on_master: bool
) -> str:
    """
    Build the composite version string.

    Examples:
        (1, 2, 0, "", 0, True) -> "1.2"
        (1, 2, 3, "", 4, True) -> "1.2.3-4"
        (1, 3, 0, "alpha", 7, False) -> "1.3-alpha.7"
    """
    version = f"{major}.{minor}"
    if patch != 0:
        version += f".{patch}"
    if on_master and distance == 0:
        return version
    suffix = f"{flag}.{distance}" if flag else str(distance)
    return f"{version}-{suffix}"


def derive_version_info(
    directory: str | Path,
    custom: Version | None = None,
    fallback_type: FallbackType | None = None,
    settings: Settings | None = None,
) -> VersionInfo:
    """
    Derive version information for a checkout by querying git.

    Args:
        directory: Directory inside the git checkout
        custom: Version that overrules the derived one if it is greater
        fallback_type: 'release' treats builds without a known branch as
            final releases
        settings: Settings to use instead of the global ones

    Returns:
        VersionInfo; fields that git could not provide keep their defaults.
    """
    cfg = settings or default_settings
    repo = GitRepo(directory, cfg.git_executable)

    major = minor = patch = 0
    branch = UNKNOWN
    flag = UNKNOWN
    distance = 0
    isdirty = False
    shorthash = fullhash = UNKNOWN
    success = False
    on_master = False

    sentry_sdk.add_breadcrumb(
        category="version",
        message="Deriving version information",
        level="info",
        data={"directory": str(directory)},
    )

    if repo.available():
        tag = repo.describe_tags(f"{cfg.version_tag_prefix}[0-9].[0-9]*")
        if tag is not None:
            parsed = parse_tag_version(tag, cfg.version_tag_prefix)
            if parsed:
                (major, minor, patch), distance = parsed
        else:
            count = repo.commit_count()
            if count and count.isdigit():
                distance = int(count)

        described = repo.describe_dirty()
        isdirty = bool(described and described.endswith("-dirty"))

        kind: BranchKind = "other"
        current = repo.current_branch()
        if current is not None:
            if current == "HEAD" and cfg.fallback_branch:
                current = cfg.fallback_branch
            branch = current
            kind = classify_branch(branch, cfg)

        if kind == "release":
            flag = cfg.version_rc_flag
            branch_version = parse_branch_version(branch, cfg.rc_branch_prefix)
            if branch_version and branch_version > (major, minor, patch):
                major, minor, patch = branch_version
            else:
                minor, patch = minor + 1, 0

            rc_tag = repo.describe_tags(f"{cfg.version_rc_start_tag_prefix}[0-9].[0-9]*")
            if rc_tag is not None:
                rc_parsed = parse_tag_version(rc_tag, cfg.version_rc_start_tag_prefix)
                if rc_parsed:
                    distance = rc_parsed[1]
        elif kind == "hotfix":
            flag = cfg.version_rc_flag
            branch_version = parse_branch_version(branch, cfg.hotfix_branch_prefix)
            if branch_version and branch_version > (major, minor, patch):
                major, minor, patch = branch_version
            else:
                patch += 1
        elif kind == "master":
            flag = ""
            on_master = True
        else:
            minor, patch = minor + 1, 0
            flag = cfg.version_alpha_flag

        short = repo.short_hash()
        if short is None:
            logger.info("Could not fetch short version hash")
        full = repo.full_hash()
        if full is None:
            logger.info("Could not fetch full version hash")
        shorthash = short or UNKNOWN
        fullhash = full or UNKNOWN
        success = short is not None and full is not None
    else:
        logger.warning("Git not found. Possible incomplete version information.")

    if branch in (UNKNOWN, ""):
        if fallback_type == "release":
            on_master = True
            flag = ""
        branch = NOT_IN_REPO

    if custom is not None and custom > (major, minor, patch):
        major, minor, patch = custom

    return VersionInfo(
        version_string=format_version_string(
            major, minor, patch, flag, distance, on_master
        ),
        version_branch=branch,
        version_fullhash=fullhash,
        version_shorthash=shorthash,
        version_isdirty=isdirty,
        version_distance=distance,
        version_flag=flag,
        version_major=major,
        version_minor=minor,
        version_patch=patch,
        success=success,
    )


def apply_export_info(
    info: VersionInfo, export: ExportInfo, settings: Settings | None = None
) -> VersionInfo:
    """Fill in hashes and branch from a git archive export, rebuilding the string."""
    cfg = settings or default_settings
    branch, on_master = branch_from_refnames(export.refnames, cfg.master_branch)
    kind = "master" if on_master else classify_branch(branch, cfg)

    if kind == "master":
        flag = ""
    elif kind == "release":
        flag = cfg.version_rc_flag
    elif kind == "hotfix":
        flag = HOTFIX_FLAG
    else:
        flag = cfg.version_alpha_flag

    return info.model_copy(
        update={
            "version_shorthash": export.shorthash,
            "version_fullhash": export.fullhash,
            "version_branch": branch,
            "version_flag": flag,
            "version_string": format_version_string(
                info.version_major,
                info.version_minor,
                info.version_patch,
                flag,
                info.version_distance,
                kind == "master",
            ),
        }
    )


def resolve_version_info(
    directory: str | Path,
    prefix: str,
    custom: Version | None = None,
    fallback_type: FallbackType | None = None,
    settings: Settings | None = None,
) -> VersionInfo:
    """
    Look up version information the way a build does.

    A complete snapshot shipped with an exported source tree wins. Otherwise
    git is queried, and missing hashes are taken from `.git_archival.txt`.
    """
    archived = read_archive_version_info(directory, prefix)
    if archived is not None and archived.success:
        logger.info("Version information from archive file prefix={prefix}", prefix=prefix)
        return archived

    info = derive_version_info(directory, custom, fallback_type, settings)

    if UNKNOWN in (info.version_fullhash, info.version_shorthash):
        export = read_export_info(directory)
        if export is not None:
            logger.info("Using git archive export info as fallback for version info")
            info = apply_export_info(info, export, settings)

    if not info.success:
        logger.warning(
            "Failure during version retrieval. Possible incomplete version information!"
        )
    return info
