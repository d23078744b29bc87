"""Read-only access to build-time version information."""

import importlib.util
from pathlib import Path
from types import ModuleType

from gitversion.models import VersionInfo


class VersionInfoProvider:
    """
    Exposes version metadata through zero-argument accessors.

    The wrapped VersionInfo is frozen, so every accessor returns the same
    value for the lifetime of the program and can be called from any thread.
    """

    __slots__ = ("_info",)

    def __init__(self, info: VersionInfo) -> None:
        self._info = info

    @classmethod
    def from_module(cls, module: ModuleType) -> "VersionInfoProvider":
        """Build a provider from a module generated from the default template."""
        return cls(
            VersionInfo(
                version_string=module.version_string(),
                version_branch=module.version_branch(),
                version_fullhash=module.version_fullhash(),
                version_shorthash=module.version_shorthash(),
                version_isdirty=module.version_isdirty(),
                version_distance=module.version_distance(),
                version_flag=module.version_flag(),
                version_major=getattr(module, "VERSION_MAJOR", 0),
                version_minor=getattr(module, "VERSION_MINOR", 0),
                version_patch=getattr(module, "VERSION_PATCH", 0),
            )
        )

    @property
    def info(self) -> VersionInfo:
        return self._info

    def version_string(self) -> str:
        return self._info.version_string

    def version_branch(self) -> str:
        return self._info.version_branch

    def version_fullhash(self) -> str:
        return self._info.version_fullhash

    def version_shorthash(self) -> str:
        return self._info.version_shorthash

    def version_isdirty(self) -> bool:
        return self._info.version_isdirty

    def version_distance(self) -> int:
        return self._info.version_distance

    def version_flag(self) -> str:
        return self._info.version_flag


def load_provider(path: str | Path) -> VersionInfoProvider:
    """
    Import a generated version module from a file and wrap it.

    Raises:
        FileNotFoundError: If the module does not exist
        ImportError: If the file cannot be loaded as a module
        SyntaxError: If the file is not valid Python
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"No generated version module at {path}")

    spec = importlib.util.spec_from_file_location(path.stem, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path} as a module")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return VersionInfoProvider.from_module(module)
