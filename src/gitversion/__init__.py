"""Version information from git for builds."""

from gitversion.models import VersionInfo
from gitversion.provider import VersionInfoProvider, load_provider
from gitversion.render import add_version_info
from gitversion.version import derive_version_info, resolve_version_info

__all__ = [
    "VersionInfo",
    "VersionInfoProvider",
    "add_version_info",
    "derive_version_info",
    "load_provider",
    "resolve_version_info",
]
