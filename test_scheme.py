from __future__ import annotations

import os
import unittest

from zipembed.errors import Base64AlphabetError, EscapeSequenceError, UsageError
from zipembed.scheme import Base64Scheme, EscapeScheme, decode, encode, get_scheme, scheme_names


_SAMPLES = [
    b"",
    b"\x00" * 300,
    b"\xff" * 300,
    bytes(range(256)),
    b"plain ascii text with spaces",
    b'"quoted" \\ back\\slash\r\n\ttab',
    os.urandom(4096),
]


class SchemeInverseTests(unittest.TestCase):
    def test_decode_inverts_encode(self):
        for name in scheme_names():
            for data in _SAMPLES:
                with self.subTest(scheme=name, size=len(data)):
                    self.assertEqual(decode(encode(data, name), name), data)

    def test_line_breaks_are_cosmetic(self):
        data = os.urandom(2000)
        for name in scheme_names():
            text = encode(data, name)
            self.assertIn("\n", text)
            self.assertEqual(decode(text.replace("\n", ""), name), decode(text, name))

    def test_encoding_is_deterministic(self):
        data = os.urandom(512)
        for name in scheme_names():
            self.assertEqual(encode(data, name), encode(data, name))

    def test_unknown_scheme(self):
        with self.assertRaises(UsageError):
            get_scheme("rot13")


class EscapeSchemeTests(unittest.TestCase):
    def setUp(self):
        self.s = EscapeScheme()

    def test_short_escapes(self):
        self.assertEqual(self.s.encode(b'\n"\\'), '\\n\\"\\\\')
        self.assertEqual(self.s.decode('\\n\\"\\\\'), b'\n"\\')
        self.assertEqual(self.s.encode(b"\r\t"), "\\r\\t")

    def test_hex_escapes_for_non_printable(self):
        self.assertEqual(self.s.encode(b"\x00\x1f\x7f\x80\xff"), "\\x00\\x1f\\x7f\\x80\\xff")
        self.assertEqual(self.s.encode(b" ~"), " ~")

    def test_escape_positions_preserved(self):
        data = b"a\nb\"c\\d"
        self.assertEqual(self.s.decode(self.s.encode(data)), data)

    def test_line_width(self):
        text = self.s.encode(b"a" * 200)
        self.assertEqual([len(line) for line in text.split("\n")], [80, 80, 40])

    def test_break_never_splits_escape(self):
        data = bytes(range(256)) * 4
        lines = self.s.encode(data).split("\n")
        for line in lines[:-1]:
            self.assertGreaterEqual(len(line), 80)
            self.assertLessEqual(len(line), 83)
        # Every line decodes on its own when breaks fall between tokens
        self.assertEqual(b"".join(self.s.decode(line) for line in lines), data)

    def test_malformed_sequences(self):
        for bad in ["\\q", "\\x4", "\\xzz", "abc\\", "\x01"]:
            with self.subTest(literal=bad):
                with self.assertRaises(EscapeSequenceError):
                    self.s.decode(bad)


class Base64SchemeTests(unittest.TestCase):
    def setUp(self):
        self.s = Base64Scheme()

    def test_line_width(self):
        lines = self.s.encode(os.urandom(300)).split("\n")
        self.assertEqual(len(lines), 7)
        for line in lines[:-1]:
            self.assertEqual(len(line), 60)

    def test_whitespace_ignored(self):
        self.assertEqual(self.s.decode("aGVs\r\n bG8=\t\n"), b"hello")

    def test_invalid_alphabet(self):
        with self.assertRaises(Base64AlphabetError):
            self.s.decode("aGV$bG8=")
        with self.assertRaises(Base64AlphabetError):
            self.s.decode("aGVsbG8")


if __name__ == "__main__":
    unittest.main()
