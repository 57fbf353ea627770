from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .constants import (
    DEFAULT_LANG,
    DEFAULT_PACKAGE,
    DEFAULT_SCHEME,
    LANG_EXTENSIONS,
    ROOT_NAME_BASE,
    ROOT_NAME_PATH,
)
from .errors import UsageError


@dataclass(frozen=True)
class BundleConfig:
    """Options that shape how a root path is walked and archived.

    Attributes:
        exclude: fnmatch patterns; a member whose base name or archive name
            matches any of them is skipped (excluded directories are pruned).
        include_dirs: Emit a directory entry for every subdirectory.
        root_name: How a plain-file root is named in the archive: "base" uses
            the file's base name, "path" the normalized path as given.
        verbose: Print every path as it is added.
    """

    exclude: Tuple[str, ...] = ()
    include_dirs: bool = True
    root_name: str = ROOT_NAME_BASE
    verbose: bool = False

    def __post_init__(self):
        if self.root_name not in (ROOT_NAME_BASE, ROOT_NAME_PATH):
            raise UsageError(f"unknown root naming mode: {self.root_name}")


@dataclass(frozen=True)
class GenerateOptions:
    """Options for rendering the generated source unit."""

    package: str = DEFAULT_PACKAGE
    data_only: bool = False
    scheme: str = DEFAULT_SCHEME
    lang: str = DEFAULT_LANG
    replace_option: bool = True

    def __post_init__(self):
        if self.lang not in LANG_EXTENSIONS:
            raise UsageError(f"unsupported target language: {self.lang}")
        if not self.package:
            raise UsageError("package name may not be empty")
