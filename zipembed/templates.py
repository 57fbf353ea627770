"""Source templates for the generated file.

Each target language has one extraction routine. The pieces that vary are the
decode step (base64 needs a decoder import, escaped data is already a byte
literal) and whether the routine takes a ``replace`` argument.
"""

from __future__ import annotations

from typing import Dict, List

from .config import GenerateOptions
from .constants import LANG_GO, LANG_PYTHON, SCHEME_BASE64, ZIPDATA_NAME
from .errors import UsageError


# -------- Go --------

_GO_SHORT_HEADER = """package %(package)s

%(decl)s %(name)s = """

_GO_FULL_HEADER = """package %(package)s

import (
%(imports)s)

%(decl)s %(name)s = """

_GO_UNZIP = """// Unzip extracts the zip data to the file system. The path specifies the
// directory to extract the files to.%(replace_doc)s
func Unzip(path string%(replace_param)s) error {
%(decode)s
	// Open the zip archive.
	r, err := zip.NewReader(bytes.NewReader(data), int64(len(data)))
	if err != nil {
		return err
	}

	// Extract the files in the archive.
	for _, f := range r.File {
		if err := extractFile(f, path%(replace_arg)s); err != nil {
			return err
		}
	}

	return nil
}

// extractFile extracts a single file from the zip archive.
func extractFile(f *zip.File, path string%(replace_param)s) error {
	// Open the file in the archive.
	rc, err := f.Open()
	if err != nil {
		return err
	}

	defer rc.Close()

	// Create the file in the file system.
	path = filepath.Join(path, f.Name)
	if f.FileInfo().IsDir() {
		if err := os.MkdirAll(path, 0755); err != nil {
			return err
		}
	} else {
		if err := os.MkdirAll(filepath.Dir(path), 0755); err != nil {
			return err
		}
%(replace_check)s
		out, err := os.Create(path)
		if err != nil {
			return err
		}
		defer out.Close()

		// Copy the file contents.
		if _, err := io.Copy(out, rc); err != nil {
			return err
		}
	}

	return nil
}
"""

_GO_REPLACE_CHECK = """
		// If the file exists and we are not replacing, do nothing.
		if _, err := os.Stat(path); !replace && err == nil {
			return nil
		}
"""

_GO_DECODE_BASE64 = """	// Decode the zip data.
	data, err := base64.StdEncoding.DecodeString(%s)
	if err != nil {
		return err
	}
"""

_GO_DECODE_ESCAPE = """	data := %s
"""


# -------- Python --------

_PY_HEADER = '''"""Embedded archive for the ``%(package)s`` package.

Generated by zipembed; do not edit.
"""
%(imports)s
%(name)s = '''

_PY_UNZIP = '''

def unzip(path%(replace_param)s):
    """Extract the embedded archive into the directory at path.%(replace_doc)s"""
%(decode)s    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        for info in zf.infolist():
            _extract_member(zf, info, path%(replace_arg)s)


def _extract_member(zf, info, path%(replace_param)s):
    dst = os.path.join(path, info.filename)
    if info.is_dir():
        os.makedirs(dst, mode=0o755, exist_ok=True)
        return
    os.makedirs(os.path.dirname(dst) or ".", mode=0o755, exist_ok=True)
%(replace_check)s    with zf.open(info) as src, open(dst, "wb") as out:
        shutil.copyfileobj(src, out)
'''

_PY_REPLACE_CHECK = """    if not replace and os.path.exists(dst):
        return
"""


class Target:
    """Renders the three segments of a generated source unit for one language."""

    def header(self, options: GenerateOptions) -> str:
        raise NotImplementedError

    def literal(self, lines: List[str], options: GenerateOptions) -> str:
        raise NotImplementedError

    def footer(self, options: GenerateOptions) -> str:
        raise NotImplementedError


class GoTarget(Target):
    def _imports(self, options: GenerateOptions) -> List[str]:
        imports = ["archive/zip", "bytes"]
        if options.scheme == SCHEME_BASE64:
            imports.append("encoding/base64")
        imports += ["io", "os", "path/filepath"]
        return imports

    def _decl(self, options: GenerateOptions) -> str:
        # Escaped data must be a []byte for the reader, which cannot be const
        if options.scheme != SCHEME_BASE64 and not options.data_only:
            return "var"
        return "const"

    def header(self, options: GenerateOptions) -> str:
        params = {"package": options.package, "decl": self._decl(options), "name": ZIPDATA_NAME}
        if options.data_only:
            return _GO_SHORT_HEADER % params
        params["imports"] = "".join(f'\t"{imp}"\n' for imp in self._imports(options))
        return _GO_FULL_HEADER % params

    def literal(self, lines: List[str], options: GenerateOptions) -> str:
        if options.scheme == SCHEME_BASE64:
            return "`\n" + "".join(line + "\n" for line in lines) + "`\n"
        quoted = " +\n\t".join(f'"{line}"' for line in lines) if lines else '""'
        if options.data_only:
            return quoted + "\n"
        return "[]byte(" + quoted + ")\n"

    def footer(self, options: GenerateOptions) -> str:
        if options.data_only:
            return ""
        if options.scheme == SCHEME_BASE64:
            decode = _GO_DECODE_BASE64 % ZIPDATA_NAME
        else:
            decode = _GO_DECODE_ESCAPE % ZIPDATA_NAME
        params = _replace_params(options, go=True)
        params["decode"] = decode
        return "\n" + _GO_UNZIP % params


class PythonTarget(Target):
    def header(self, options: GenerateOptions) -> str:
        if options.data_only:
            imports = ""
        else:
            mods = ["io", "os", "shutil", "zipfile"]
            if options.scheme == SCHEME_BASE64:
                mods.insert(0, "base64")
            imports = "\n" + "".join(f"import {m}\n" for m in mods) + "\n"
        return _PY_HEADER % {"package": options.package, "imports": imports, "name": ZIPDATA_NAME}

    def literal(self, lines: List[str], options: GenerateOptions) -> str:
        if options.scheme == SCHEME_BASE64:
            return '"""\n' + "".join(line + "\n" for line in lines) + '"""\n'
        if not lines:
            return 'b""\n'
        return "(\n" + "".join(f'    b"{line}"\n' for line in lines) + ")\n"

    def footer(self, options: GenerateOptions) -> str:
        if options.data_only:
            return ""
        if options.scheme == SCHEME_BASE64:
            decode = f"    data = base64.b64decode({ZIPDATA_NAME})\n"
        else:
            decode = f"    data = {ZIPDATA_NAME}\n"
        params = _replace_params(options, go=False)
        params["decode"] = decode
        return _PY_UNZIP % params


def _replace_params(options: GenerateOptions, *, go: bool) -> Dict[str, str]:
    if not options.replace_option:
        return {
            "replace_doc": "" if go else "\n\n    Existing files are always overwritten.\n    ",
            "replace_param": "",
            "replace_arg": "",
            "replace_check": "",
        }
    if go:
        return {
            "replace_doc": " If replace is true, existing files are\n// replaced in the output directory.",
            "replace_param": ", replace bool",
            "replace_arg": ", replace",
            "replace_check": _GO_REPLACE_CHECK,
        }
    return {
        "replace_doc": "\n\n    Existing files are left untouched unless replace is true.\n    ",
        "replace_param": ", replace=True",
        "replace_arg": ", replace",
        "replace_check": _PY_REPLACE_CHECK,
    }


_TARGETS: Dict[str, Target] = {
    LANG_GO: GoTarget(),
    LANG_PYTHON: PythonTarget(),
}


def get_target(lang: str) -> Target:
    try:
        return _TARGETS[lang]
    except KeyError:
        raise UsageError(f"unsupported target language: {lang}") from None
