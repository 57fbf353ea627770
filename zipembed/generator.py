from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .config import GenerateOptions
from .scheme import get_scheme
from .templates import get_target


@dataclass(frozen=True)
class GeneratedSource:
    header: str
    literal: str
    footer: str

    @property
    def segments(self) -> List[str]:
        return [self.header, self.literal, self.footer]

    @property
    def text(self) -> str:
        return "".join(self.segments)

    @property
    def size(self) -> int:
        return sum(len(s.encode("utf-8")) for s in self.segments)


def generate(archive: bytes, options: GenerateOptions = GenerateOptions()) -> GeneratedSource:
    """Render the source unit embedding archive under the selected scheme.

    The footer (extraction routine) is empty in data-only mode.
    """
    scheme = get_scheme(options.scheme)
    target = get_target(options.lang)
    return GeneratedSource(
        header=target.header(options),
        literal=target.literal(scheme.lines(archive), options),
        footer=target.footer(options),
    )


def write_source(path: str, source: GeneratedSource) -> int:
    """Write every segment of source to path and return the bytes written.

    The destination is truncated as soon as it is opened; a failure part way
    through leaves a partial file behind.
    """
    size = 0
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for seg in source.segments:
            f.write(seg)
            size += len(seg.encode("utf-8"))
    return size
