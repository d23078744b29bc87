import json
from pathlib import Path

import sentry_sdk
import typer

from gitversion.config import settings
from gitversion.example import print_version, print_version_of_lib
from gitversion.logging import logger
from gitversion.provider import VersionInfoProvider, load_provider
from gitversion.render import TemplateError, add_version_info, make_identifier
from gitversion.version import FallbackType, Version, resolve_version_info

app = typer.Typer(help="gitversion: version information from git for builds")

DEFAULT_PREFIX = "gitversion"
FALLBACK_TYPES = ("release", "develop")


@app.callback()
def _init() -> None:
    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.sentry_environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            integrations=[],
            attach_stacktrace=True,
        )
        logger.info(
            "Sentry initialized environment={environment} traces_sample_rate={traces_sample_rate}",
            environment=settings.sentry_environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
        )


def parse_custom_version(value: str | None) -> Version | None:
    """Parse 'X.Y' or 'X.Y.Z' given on the command line."""
    if value is None:
        return None
    parts = value.split(".")
    if not 2 <= len(parts) <= 3 or not all(p.isdigit() for p in parts):
        raise typer.BadParameter(f"expected X.Y or X.Y.Z, got {value!r}")
    major, minor, *rest = (int(p) for p in parts)
    return major, minor, rest[0] if rest else 0


def check_fallback_type(value: str | None) -> FallbackType | None:
    if value is not None and value not in FALLBACK_TYPES:
        raise typer.BadParameter(f"must be one of {', '.join(FALLBACK_TYPES)}")
    return value  # type: ignore[return-value]


@app.command()
def describe(
    directory: Path = typer.Argument(Path("."), help="Directory inside the checkout"),
    prefix: str = typer.Option(DEFAULT_PREFIX, "--prefix", help="Archive snapshot name"),
    as_json: bool = typer.Option(False, "--json", help="Print all fields as JSON"),
    custom_version: str | None = typer.Option(
        None, "--custom-version", help="Version used if greater than the derived one"
    ),
    fallback_type: str | None = typer.Option(
        None, "--fallback-type", help="release|develop, used outside of git"
    ),
):
    """Print the version derived from the state of DIRECTORY."""
    try:
        identifier = make_identifier(prefix)
    except TemplateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    info = resolve_version_info(
        directory,
        identifier,
        parse_custom_version(custom_version),
        check_fallback_type(fallback_type),
    )
    if as_json:
        typer.echo(json.dumps(info.model_dump(), indent=2))
    else:
        typer.echo(info.version_string)


@app.command()
def generate(
    target: str = typer.Argument(..., help="Build target name"),
    directory: Path = typer.Argument(..., help="Directory to read the git state from"),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory for rendered files"
    ),
    template: list[Path] | None = typer.Option(
        None, "--template", "-t", help="Template to render (repeatable)"
    ),
    default_templates: bool = typer.Option(
        False, "--default-templates", help="Render the built-in templates"
    ),
    prefix: str | None = typer.Option(None, "--prefix", help="Name for rendered files"),
    custom_version: str | None = typer.Option(
        None, "--custom-version", help="Version used if greater than the derived one"
    ),
    fallback_type: str | None = typer.Option(
        None, "--fallback-type", help="release|develop, used outside of git"
    ),
    archive_dir: Path | None = typer.Option(
        None, "--archive-dir", help="Where to write the archive snapshot"
    ),
):
    """Render version information for TARGET into its output directory."""
    try:
        _, outputs = add_version_info(
            target,
            directory,
            output_dir=output_dir,
            templates=template or [],
            use_default_templates=default_templates,
            prefix=prefix,
            custom=parse_custom_version(custom_version),
            fallback_type=check_fallback_type(fallback_type),
            archive_dir=archive_dir,
        )
    except TemplateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for output in outputs:
        typer.echo(str(output))


@app.command()
def example(
    module: Path | None = typer.Option(
        None, "--module", "-m", help="Generated version module to read"
    ),
    directory: Path = typer.Option(
        Path("."), "--directory", "-d", help="Checkout to derive the version from"
    ),
    library: bool = typer.Option(
        False, "--library", help="Print in the library example format"
    ),
):
    """Print the version information of a build, one field per line."""
    if module is not None:
        try:
            provider = load_provider(module)
        except (FileNotFoundError, ImportError, SyntaxError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    else:
        provider = VersionInfoProvider(resolve_version_info(directory, DEFAULT_PREFIX))

    if library:
        print_version_of_lib(provider)
    else:
        print_version(provider)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
