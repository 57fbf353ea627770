from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from typing import Iterable, Iterator

from .config import BundleConfig
from .constants import ROOT_NAME_PATH
from .pathutil import join_name, norm_path


@dataclass(frozen=True)
class WalkItem:
    fs_path: str
    name: str  # archive-relative, forward slashes, no trailing slash
    is_dir: bool = False


def is_excluded(name: str, patterns: Iterable[str]) -> bool:
    """Return True when the archive name or its base name matches a pattern."""
    base = name.rsplit("/", 1)[-1]
    for pat in patterns:
        if fnmatch.fnmatch(base, pat) or fnmatch.fnmatch(name, pat):
            return True
    return False


def walk(root: str, config: BundleConfig = BundleConfig()) -> Iterator[WalkItem]:
    """Yield the files (and optionally directories) under root, depth-first.

    A plain-file root yields a single item. Directory contents come out in the
    order the operating system lists them. Errors from stat/listing surface
    immediately as OSError.
    """
    os.stat(root)  # missing or unreadable root raises here
    if not os.path.isdir(root):
        if config.root_name == ROOT_NAME_PATH:
            name = norm_path(root)
        else:
            name = os.path.basename(os.path.normpath(root))
        if not name:
            raise ValueError(f"Cannot derive an archive name from {root!r}")
        yield WalkItem(root, name)
        return
    yield from _walk_dir(root, "", config)


def _walk_dir(path: str, prefix: str, config: BundleConfig) -> Iterator[WalkItem]:
    with os.scandir(path) as it:
        entries = list(it)
    for entry in entries:
        name = join_name(prefix, entry.name)
        if is_excluded(name, config.exclude):
            continue
        if entry.is_dir():
            if config.include_dirs:
                yield WalkItem(entry.path, name, is_dir=True)
            yield from _walk_dir(entry.path, name, config)
        else:
            yield WalkItem(entry.path, name)
