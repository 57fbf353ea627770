from __future__ import annotations

import dataclasses
import io
import os
import time
import zipfile
from typing import Callable, Optional, Set

from .config import BundleConfig
from .constants import DIR_EXTERNAL_ATTR, FILE_EXTERNAL_ATTR, ZIP_EPOCH, ZIP_MAX
from .errors import ArchiveClosedError, DuplicateEntryError
from .pathutil import dir_name, norm_path
from .walker import WalkItem, walk


def _zip_time(mtime: Optional[float]) -> tuple:
    if mtime is None:
        mtime = time.time()
    dt = time.localtime(mtime)[:6]
    if dt < ZIP_EPOCH:
        return ZIP_EPOCH
    if dt > ZIP_MAX:
        return ZIP_MAX
    return dt


class ArchiveBuilder:
    """In-memory ZIP writer that accepts whole entries one at a time.

    The container is only valid once close() has written the central
    directory; close() returns the finished bytes.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self._buf = io.BytesIO()
        self._zf: Optional[zipfile.ZipFile] = zipfile.ZipFile(self._buf, "w", compression=compression)
        self._names: Set[str] = set()
        self._data: Optional[bytes] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._zf is not None:
            self._zf.close()
            self._zf = None

    def _claim(self, name: str) -> None:
        if self._zf is None:
            raise ArchiveClosedError("archive is already closed")
        if name in self._names:
            raise DuplicateEntryError(f"duplicate archive entry: {name}")
        self._names.add(name)

    def add_dir(self, name: str, mtime: Optional[float] = None) -> str:
        name = dir_name(name)
        self._claim(name)
        zi = zipfile.ZipInfo(name, date_time=_zip_time(mtime))
        zi.external_attr = DIR_EXTERNAL_ATTR
        self._zf.writestr(zi, b"")
        return name

    def add_file(self, name: str, content: bytes, mtime: Optional[float] = None) -> str:
        name = norm_path(name)
        if not name:
            raise ValueError("File entry name may not be empty")
        self._claim(name)
        zi = zipfile.ZipInfo(name, date_time=_zip_time(mtime))
        zi.external_attr = FILE_EXTERNAL_ATTR
        zi.compress_type = self._zf.compression
        self._zf.writestr(zi, content)
        return name

    def close(self) -> bytes:
        if self._data is not None:
            return self._data
        if self._zf is None:
            raise ArchiveClosedError("archive was abandoned before close")
        self._zf.close()
        self._zf = None
        self._data = self._buf.getvalue()
        return self._data

    @property
    def closed(self) -> bool:
        return self._zf is None


def add_item(builder: ArchiveBuilder, item: WalkItem) -> str:
    """Copy one walked path into the archive, reading file content fully."""
    st = os.stat(item.fs_path)
    if item.is_dir:
        return builder.add_dir(item.name, mtime=st.st_mtime)
    with open(item.fs_path, "rb") as f:
        data = f.read()
    return builder.add_file(item.name, data, mtime=st.st_mtime)


def build_archive(
    root: str,
    config: BundleConfig = BundleConfig(),
    on_entry: Optional[Callable[[WalkItem], None]] = None,
) -> bytes:
    """Walk root and return the serialized ZIP container.

    Args:
        root: File or directory to bundle.
        config: Walk options (exclusions, directory entries, root naming).
        on_entry: Called with every walked item, directories included even
            when directory entries are left out of the archive.

    Raises:
        OSError: Any stat/read failure under root.
        DuplicateEntryError: Two walked items map to the same archive name.
    """
    walk_config = config
    if on_entry is not None and not config.include_dirs:
        walk_config = dataclasses.replace(config, include_dirs=True)
    with ArchiveBuilder() as builder:
        for item in walk(root, walk_config):
            if on_entry is not None:
                on_entry(item)
            if item.is_dir and not config.include_dirs:
                continue
            add_item(builder, item)
        return builder.close()
