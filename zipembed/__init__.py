"""
zipembed — bundle a file or directory tree into a generated source file.

Features:

- In-memory ZIP container built from a depth-first directory walk.
- Two interchangeable text encodings for the container bytes: escaped byte
  strings and line-wrapped base64.
- Go and Python output, with an optional generated ``Unzip``/``unzip``
  routine that restores the bundled files at runtime.

The generated file has no dependency on this package; everything the
extraction routine needs comes from the target language's standard library.
"""

__version__ = "1.1.0"

__all__ = [
    "constants",
    "walker",
    "archiver",
    "scheme",
    "generator",
    "extract",
]

# Importable programmatic API is available via zipembed.archiver and
# zipembed.generator, and the CLI function in zipembed.cli (cmd_bundle) which
# takes normal parameters.
