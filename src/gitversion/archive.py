"""Version information for source trees that are not git checkouts.

Two fallbacks exist for builds from exported archives:

* ``.git_archival.txt`` is filled in by ``git archive`` when the file is marked
  ``export-subst`` in ``.gitattributes``. It carries the commit hashes and ref
  names, but no tag distance.
* ``.gitversion/<prefix>.json`` is a full snapshot written at generation time
  and shipped inside source packages, so a rebuild reproduces the metadata.
"""

import json
import re
from pathlib import Path

from pydantic import ValidationError

from gitversion.logging import logger
from gitversion.models import UNKNOWN, ExportInfo, VersionInfo

ARCHIVAL_FILE = ".git_archival.txt"
ARCHIVE_INFO_DIR = ".gitversion"

_ARROW_RE = re.compile(r"->\s*([^,\s]+)")


def read_export_info(directory: str | Path) -> ExportInfo | None:
    """
    Read the export-subst file from the root of an exported tree.

    Args:
        directory: Root of the source tree

    Returns:
        ExportInfo, or None if the file is missing, incomplete or was never
        substituted by git archive.
    """
    path = Path(directory) / ARCHIVAL_FILE
    if not path.is_file():
        return None

    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.partition(":")
        if sep:
            values[key.strip()] = value.strip()

    fullhash = values.get("node")
    if not fullhash:
        logger.debug("No node entry in {path}", path=str(path))
        return None

    info = ExportInfo(
        fullhash=fullhash,
        shorthash=values.get("node-short") or fullhash[:7],
        refnames=values.get("ref-names", ""),
    )
    if not info.substituted:
        logger.debug("{path} was not substituted by git archive", path=str(path))
        return None
    return info


def branch_from_refnames(refnames: str, master_branch: str) -> tuple[str, bool]:
    """
    Pick the branch out of a `%D` ref name list.

    Examples:
        "HEAD -> develop, origin/develop" -> ("develop", False)
        "HEAD, tag: v1.2.0, origin/master, master" -> ("master", True)

    Returns:
        (branch, on_master); branch is 'unknown' when no branch is listed.
    """
    match = _ARROW_RE.search(refnames)
    if match:
        branch = match.group(1)
        return branch, branch == master_branch

    refs = [
        ref.strip()
        for ref in refnames.split(",")
        if ref.strip() and ref.strip() != "HEAD" and not ref.strip().startswith("tag:")
    ]
    if not refs:
        return UNKNOWN, False
    return refs[-1], refs[-1] == master_branch


def archive_info_path(directory: str | Path, prefix: str) -> Path:
    return Path(directory) / ARCHIVE_INFO_DIR / f"{prefix}.json"


def read_archive_version_info(directory: str | Path, prefix: str) -> VersionInfo | None:
    """Load a version snapshot, or None if there is no usable one."""
    path = archive_info_path(directory, prefix)
    if not path.is_file():
        return None
    try:
        return VersionInfo.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        logger.warning(
            "Ignoring invalid archive version info path={path} error={error}",
            path=str(path),
            error=str(e),
        )
        return None


def write_archive_version_info(
    info: VersionInfo, directory: str | Path, prefix: str
) -> Path:
    """Write a version snapshot that exported source trees can rebuild from."""
    path = archive_info_path(directory, prefix)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(info.model_dump(), indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    logger.debug("Wrote archive version info path={path}", path=str(path))
    return path
