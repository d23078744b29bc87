"""Render version information into files at build time."""

import re
from collections.abc import Iterable, Mapping
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

import sentry_sdk

from gitversion.archive import write_archive_version_info
from gitversion.config import Settings
from gitversion.logging import logger
from gitversion.models import VersionInfo
from gitversion.version import FallbackType, Version, resolve_version_info

TEMPLATE_SUFFIX = ".in"

_VARIABLE_RE = re.compile(r"@([A-Za-z_][A-Za-z0-9_]*)@")

_TEXT_VARIABLES = (
    "PREFIX",
    "TARGET",
    "VERSION_FLAG",
    "VERSION_SHORTHASH",
    "VERSION_FULLHASH",
    "VERSION_STRING",
    "VERSION_BRANCH",
)


class TemplateError(Exception):
    """Raised for invalid targets and unreadable templates."""


def default_templates() -> list[Traversable]:
    """Templates shipped with the package: a Python module and a VERSION file."""
    root = resources.files("gitversion") / "templates"
    return [root / "gitversion.py.in", root / "VERSION.in"]


def make_identifier(name: str) -> str:
    """
    Turn a target name into an identifier usable in file and module names.

    Examples:
        "example-lib" -> "example_lib"
        "2d-engine" -> "_2d_engine"
    """
    if not name:
        raise TemplateError("Target name must not be empty")
    identifier = re.sub(r"\W", "_", name, flags=re.ASCII)
    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier


def template_variables(info: VersionInfo, prefix: str, target: str) -> dict[str, str]:
    """
    Values available to templates as @NAME@.

    Text fields also come as `<NAME>_REPR`, a Python string literal for use
    unquoted in generated Python code.
    """
    variables = {
        "PREFIX": prefix,
        "TARGET": target,
        "VERSION_MAJOR": str(info.version_major),
        "VERSION_MINOR": str(info.version_minor),
        "VERSION_PATCH": str(info.version_patch),
        "VERSION_FLAG": info.version_flag,
        "VERSION_DISTANCE": str(info.version_distance),
        "VERSION_SHORTHASH": info.version_shorthash,
        "VERSION_FULLHASH": info.version_fullhash,
        "VERSION_STRING": info.version_string,
        "VERSION_ISDIRTY": "1" if info.version_isdirty else "0",
        "VERSION_BRANCH": info.version_branch,
    }
    for name in _TEXT_VARIABLES:
        variables[f"{name}_REPR"] = repr(variables[name])
    return variables


def output_name(template: Path | Traversable, prefix: str) -> str:
    """'<prefix>_<template name>' with a trailing '.in' removed."""
    name = template.name
    if name.endswith(TEMPLATE_SUFFIX):
        name = name[: -len(TEMPLATE_SUFFIX)]
    return f"{prefix}_{name}"


def configure_file(
    template: Path | Traversable, output: Path, variables: Mapping[str, str]
) -> bool:
    """
    Substitute @NAME@ placeholders in a template and write the result.

    Unknown placeholders are replaced with an empty string. The output file is
    left untouched when its content would not change, so build tools do not
    see a spurious modification.

    Returns:
        True if the output file was written
    """
    try:
        text = template.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read template {template}: {e}") from e

    rendered = _VARIABLE_RE.sub(lambda m: variables.get(m.group(1), ""), text)

    if output.is_file() and output.read_text(encoding="utf-8") == rendered:
        logger.debug("Unchanged output={output}", output=str(output))
        return False

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    logger.debug(
        "Configured template={template} output={output}",
        template=str(template),
        output=str(output),
    )
    return True


def add_version_info(
    target: str,
    directory: str | Path,
    output_dir: str | Path | None = None,
    templates: Iterable[str | Path | Traversable] = (),
    use_default_templates: bool = False,
    prefix: str | None = None,
    custom: Version | None = None,
    fallback_type: FallbackType | None = None,
    archive_dir: str | Path | None = None,
    settings: Settings | None = None,
) -> tuple[VersionInfo, list[Path]]:
    """
    Resolve version information for a build target and render its templates.

    Args:
        target: Build target name
        directory: Source directory to read the git state from
        output_dir: Where rendered files go (default: ./version/<target id>)
        templates: Template files to render
        use_default_templates: Also render the templates shipped with gitversion
        prefix: Name for rendered files and the archive snapshot (default: target)
        custom: Version that overrules the derived one if it is greater
        fallback_type: 'release' or 'develop', used when no branch is known
        archive_dir: Where the archive snapshot goes (default: <output_dir>/archive_append)
        settings: Settings to use instead of the global ones

    Returns:
        The version information and the list of rendered files
    """
    if not target:
        raise TemplateError("Required argument 'target' is not set.")
    if not str(directory):
        raise TemplateError("Required argument 'directory' is not set.")

    target_id = make_identifier(target)
    prefix = make_identifier(prefix) if prefix else target_id
    output_path = Path(output_dir) if output_dir else Path.cwd() / "version" / target_id

    sentry_sdk.add_breadcrumb(
        category="render",
        message=f"Adding version info to {target}",
        level="info",
        data={"target": target, "prefix": prefix, "directory": str(directory)},
    )

    info = resolve_version_info(directory, prefix, custom, fallback_type, settings)

    all_templates: list[Path | Traversable] = [
        Path(t) if isinstance(t, str) else t for t in templates
    ]
    if use_default_templates:
        all_templates.extend(default_templates())

    variables = template_variables(info, prefix, target)
    outputs = []
    for template in all_templates:
        output = output_path / output_name(template, prefix)
        configure_file(template, output, variables)
        outputs.append(output)

    write_archive_version_info(
        info, Path(archive_dir) if archive_dir else output_path / "archive_append", prefix
    )

    logger.info(
        "Version info for '{target}': {version}",
        target=target,
        version=info.version_string,
    )
    return info, outputs
