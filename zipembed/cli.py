from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from zipembed import __version__
from zipembed.archiver import build_archive
from zipembed.config import BundleConfig, GenerateOptions
from zipembed.constants import (
    DEFAULT_LANG,
    DEFAULT_OUTPUT_STEM,
    DEFAULT_PACKAGE,
    DEFAULT_SCHEME,
    LANG_EXTENSIONS,
    ROOT_NAME_BASE,
    ROOT_NAME_PATH,
)
from zipembed.errors import UsageError, ZipEmbedError
from zipembed.generator import generate, write_source
from zipembed.scheme import scheme_names
from zipembed.walker import WalkItem


def resolve_output(output: Optional[str], lang: str = DEFAULT_LANG) -> str:
    """Apply the target language's source extension to an output name.

    A name without an extension gets one appended; any other extension is
    rejected.

    Raises:
        UsageError: The name carries a different extension.
    """
    ext = LANG_EXTENSIONS[lang]
    if not output:
        return DEFAULT_OUTPUT_STEM + ext
    base = os.path.basename(output)
    if base.startswith(".") and base.count(".") == 1:
        actual = base  # ".go" is its own extension
    else:
        _root, actual = os.path.splitext(output)
    if actual == "":
        return output + ext
    if actual != ext:
        raise UsageError(f"Output file must have {ext} extension")
    return output


def _log_item(item: WalkItem) -> None:
    if item.is_dir:
        print(item.fs_path + "/")
    else:
        print(item.fs_path)


def cmd_bundle(
    path: str,
    *,
    output: Optional[str] = None,
    package: str = DEFAULT_PACKAGE,
    data_only: bool = False,
    scheme: str = DEFAULT_SCHEME,
    lang: str = DEFAULT_LANG,
    exclude: Optional[List[str]] = None,
    include_dirs: bool = True,
    root_name: str = ROOT_NAME_BASE,
    replace_option: bool = True,
    verbose: bool = False,
) -> int:
    """Bundle path into a generated source file.

    Args:
        path: File or directory to bundle.
        output: Output file name; the language's extension is applied.
        package: Package name written into the generated file.
        data_only: Emit only the zipdata constant, no extraction routine.
        scheme: Literal encoding, "escape" or "base64".
        lang: Target language, "go" or "python".
        exclude: fnmatch patterns for members to leave out.
        include_dirs: Add a directory entry for every subdirectory.
        root_name: Naming of a plain-file root ("base" or "path").
        replace_option: Give the generated routine a replace argument;
            without it the routine always overwrites.
        verbose: Print every path as it is added.

    Returns:
        Total bytes written to the output file.
    """
    out = resolve_output(output, lang)
    config = BundleConfig(
        exclude=tuple(exclude or ()),
        include_dirs=include_dirs,
        root_name=root_name,
        verbose=verbose,
    )
    options = GenerateOptions(
        package=package,
        data_only=data_only,
        scheme=scheme,
        lang=lang,
        replace_option=replace_option,
    )
    if config.verbose and os.path.isdir(path):
        print(path + "/")
    archive = build_archive(path, config, on_entry=_log_item if config.verbose else None)
    size = write_source(out, generate(archive, options))
    print(f"Wrote zip data to {out} ({size} bytes)")
    return size


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="zipembed",
        description="Create a source file that embeds a file or directory tree as zip data.",
        epilog="The generated extraction routine depends only on the target language's standard library.",
    )
    ap.add_argument("path", help="File or directory to bundle")
    ap.add_argument("-v", "--version", action="version", version=f"zipembed {__version__}")
    ap.add_argument("-d", "--data", action="store_true", help="Write only the zip data to the output file")
    ap.add_argument("-l", "--log", action="store_true", help="Log the files as they are added to the zip archive")
    ap.add_argument("-o", "--output", help="Write output to FILE (default: unzip.go, or unzip.py with --lang python)")
    ap.add_argument("-p", "--package", default=DEFAULT_PACKAGE, help="Package name (default: main)")
    ap.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Leave out members whose name matches PATTERN (glob). May be repeated.",
    )
    ap.add_argument(
        "-e",
        "--encoding",
        choices=scheme_names(),
        default=DEFAULT_SCHEME,
        help="Literal encoding: escaped byte string or base64 (default: escape)",
    )
    ap.add_argument("--lang", choices=sorted(LANG_EXTENSIONS), default=DEFAULT_LANG, help="Target language (default: go)")
    ap.add_argument(
        "--root-name",
        choices=[ROOT_NAME_BASE, ROOT_NAME_PATH],
        default=ROOT_NAME_BASE,
        help="Archive name for a single-file root: its base name or the path as given (default: base)",
    )
    ap.add_argument("--no-dirs", action="store_true", help="Do not add directory entries")
    ap.add_argument(
        "--no-replace-option",
        action="store_true",
        help="Generate an extraction routine without a replace argument (always overwrites)",
    )
    return ap


def main(argv: List[str] | None = None):
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        cmd_bundle(
            args.path,
            output=args.output,
            package=args.package,
            data_only=args.data,
            scheme=args.encoding,
            lang=args.lang,
            exclude=args.exclude,
            include_dirs=not args.no_dirs,
            root_name=args.root_name,
            replace_option=not args.no_replace_option,
            verbose=args.log,
        )
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (ZipEmbedError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
