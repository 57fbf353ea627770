from __future__ import annotations

import base64
import binascii
import re
from typing import Dict, List

from .constants import BASE64_LINE_WIDTH, ESCAPE_LINE_WIDTH, SCHEME_BASE64, SCHEME_ESCAPE
from .errors import Base64AlphabetError, EscapeSequenceError, UsageError


_SHORT_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord('"'): '\\"',
    ord("\\"): "\\\\",
}
_SHORT_UNESCAPES = {v[1]: k for k, v in _SHORT_ESCAPES.items()}
_HEXDIGITS = frozenset("0123456789abcdefABCDEF")
_WS_RE = re.compile(r"\s+")


def _escape_byte(b: int) -> str:
    esc = _SHORT_ESCAPES.get(b)
    if esc is not None:
        return esc
    if b < 32 or b > 126:
        return f"\\x{b:02x}"
    return chr(b)


class Scheme:
    """Byte-to-text encoding with an exact inverse.

    encode() returns the literal body with soft line breaks ("\\n") inserted
    for readability; decode() accepts text with or without those breaks.
    """

    name = ""
    line_width = 0

    def encode(self, data: bytes) -> str:
        raise NotImplementedError

    def decode(self, text: str) -> bytes:
        raise NotImplementedError

    def lines(self, data: bytes) -> List[str]:
        text = self.encode(data)
        return text.split("\n") if text else []


class EscapeScheme(Scheme):
    name = SCHEME_ESCAPE
    line_width = ESCAPE_LINE_WIDTH

    def encode(self, data: bytes) -> str:
        lines: List[str] = []
        cur: List[str] = []
        width = 0
        for b in data:
            tok = _escape_byte(b)
            cur.append(tok)
            width += len(tok)
            # Break between tokens so an escape is never split across lines
            if width >= self.line_width:
                lines.append("".join(cur))
                cur = []
                width = 0
        if cur:
            lines.append("".join(cur))
        return "\n".join(lines)

    def decode(self, text: str) -> bytes:
        # Real CR/LF bytes are always escaped, so raw ones are soft breaks
        text = text.replace("\r", "").replace("\n", "")
        out = bytearray()
        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch != "\\":
                o = ord(ch)
                if o < 32 or o > 126:
                    raise EscapeSequenceError(f"unescaped non-printable character {o:#04x} at offset {i}")
                out.append(o)
                i += 1
                continue
            if i + 1 >= n:
                raise EscapeSequenceError("dangling backslash at end of literal")
            nxt = text[i + 1]
            if nxt == "x":
                digits = text[i + 2:i + 4]
                if len(digits) != 2 or not set(digits) <= _HEXDIGITS:
                    raise EscapeSequenceError(f"malformed hex escape at offset {i}")
                out.append(int(digits, 16))
                i += 4
                continue
            b = _SHORT_UNESCAPES.get(nxt)
            if b is None:
                raise EscapeSequenceError(f"unknown escape '\\{nxt}' at offset {i}")
            out.append(b)
            i += 2
        return bytes(out)


class Base64Scheme(Scheme):
    name = SCHEME_BASE64
    line_width = BASE64_LINE_WIDTH

    def encode(self, data: bytes) -> str:
        text = base64.b64encode(data).decode("ascii")
        w = self.line_width
        return "\n".join(text[i:i + w] for i in range(0, len(text), w))

    def decode(self, text: str) -> bytes:
        compact = _WS_RE.sub("", text)
        try:
            return base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise Base64AlphabetError(f"invalid base64 literal: {exc}") from exc


_SCHEMES: Dict[str, Scheme] = {
    SCHEME_ESCAPE: EscapeScheme(),
    SCHEME_BASE64: Base64Scheme(),
}


def scheme_names() -> List[str]:
    return list(_SCHEMES)


def get_scheme(name: str) -> Scheme:
    try:
        return _SCHEMES[name]
    except KeyError:
        raise UsageError(f"unknown encoding scheme: {name}") from None


def encode(data: bytes, scheme: str) -> str:
    return get_scheme(scheme).encode(data)


def decode(text: str, scheme: str) -> bytes:
    return get_scheme(scheme).decode(text)
