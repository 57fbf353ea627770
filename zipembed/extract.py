from __future__ import annotations

import io
import os
import shutil
import zipfile
from typing import List

from .constants import DIR_MODE
from .errors import ContainerFormatError
from .scheme import get_scheme


def open_container(data: bytes) -> zipfile.ZipFile:
    """Open container bytes as a ZIP archive.

    Raises:
        ContainerFormatError: The bytes are not a complete ZIP container.
    """
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise ContainerFormatError(f"not a valid zip container ({len(data)} bytes): {exc}") from exc


def list_entries(data: bytes) -> List[str]:
    """Return the entry names of a container in archive order."""
    with open_container(data) as zf:
        return [info.filename for info in zf.infolist()]


def extract_member(zf: zipfile.ZipFile, info: zipfile.ZipInfo, path: str, replace: bool = True) -> bool:
    """Write one entry under path.

    Returns:
        False when the entry was skipped because the destination exists and
        replace is false, True otherwise.
    """
    dst = os.path.join(path, info.filename)
    if info.is_dir():
        os.makedirs(dst, mode=DIR_MODE, exist_ok=True)
        return True
    os.makedirs(os.path.dirname(dst) or ".", mode=DIR_MODE, exist_ok=True)
    if not replace and os.path.exists(dst):
        return False
    with zf.open(info) as src, open(dst, "wb") as out:
        shutil.copyfileobj(src, out)
    return True


def unzip(data: bytes, path: str, replace: bool = True) -> int:
    """Extract every entry of a container into the directory at path.

    Entries are written in container order and the first error aborts the
    run; entries written before it stay on disk.

    Args:
        data: Container bytes.
        path: Target directory (created as needed).
        replace: Overwrite existing files when True; skip them silently when
            False.

    Returns:
        Number of entries written (skipped files are not counted).
    """
    written = 0
    with open_container(data) as zf:
        for info in zf.infolist():
            if extract_member(zf, info, path, replace):
                written += 1
    return written


def unzip_literal(text: str, scheme: str, path: str, replace: bool = True) -> int:
    """Decode an encoded literal with the matching scheme and extract it."""
    return unzip(get_scheme(scheme).decode(text), path, replace)
