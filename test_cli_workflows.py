from __future__ import annotations

import contextlib
import io
import os
import runpy
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Dict

from zipembed import __version__
from zipembed.cli import cmd_bundle, main, resolve_output
from zipembed.errors import UsageError


def _build_fixture_tree(root: Path) -> Dict[str, bytes]:
    files: Dict[str, bytes] = {}
    (root / "docs").mkdir()
    (root / "docs" / "notes").mkdir()
    (root / "docs" / "empty").mkdir()
    content = b"hello world\n" * 20
    (root / "docs" / "readme.txt").write_bytes(content)
    files["docs/readme.txt"] = content

    bin_data = os.urandom(2048)
    (root / "docs" / "notes" / "binary.bin").write_bytes(bin_data)
    files["docs/notes/binary.bin"] = bin_data

    (root / "docs" / "notes" / "empty.txt").write_text("")
    files["docs/notes/empty.txt"] = b""

    (root / "skip.tmp").write_bytes(b"scratch")
    return files


def _compare_trees(src: Path, dst: Path):
    for root_src, dirs_src, files_src in os.walk(src):
        rel = os.path.relpath(root_src, src)
        root_dst = os.path.join(dst, rel) if rel != "." else str(dst)
        assert os.path.isdir(root_dst), f"Missing directory: {root_dst}"
        dirs_dst = sorted(d for d in os.listdir(root_dst) if os.path.isdir(os.path.join(root_dst, d)))
        assert dirs_dst == sorted(dirs_src), f"Directory mismatch under {root_src}: {dirs_dst} != {sorted(dirs_src)}"
        for fname in files_src:
            with open(os.path.join(root_src, fname), "rb") as sf, open(os.path.join(root_dst, fname), "rb") as df:
                assert sf.read() == df.read(), f"File contents differ: {fname}"


class CLIIntegrationTests(unittest.TestCase):
    def run_cli(self, args, *, expect: int | None = 0, cwd: Path | None = None):
        cmd = [sys.executable, "-m", "zipembed.cli"] + list(args)
        env = os.environ.copy()
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=env,
        )
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"
            )
        return proc

    def make_workspace(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        src = root / "src"
        src.mkdir()
        _build_fixture_tree(src)
        return root, src

    def test_python_roundtrip_both_encodings(self):
        workspace, src = self.make_workspace()
        (src / "skip.tmp").unlink()
        for encoding in ("escape", "base64"):
            with self.subTest(encoding=encoding):
                out = workspace / f"bundle_{encoding}"
                proc = self.run_cli([str(src), "--lang", "python", "-e", encoding, "-o", str(out)])
                generated = workspace / f"bundle_{encoding}.py"
                self.assertTrue(generated.exists())
                size = generated.stat().st_size
                self.assertIn(f"Wrote zip data to {generated} ({size} bytes)", proc.stdout)

                target = workspace / f"extract_{encoding}"
                runpy.run_path(str(generated))["unzip"](str(target))
                _compare_trees(src, target)

    def test_default_output_is_go(self):
        workspace, src = self.make_workspace()
        self.run_cli([str(src), "-p", "assets"], cwd=workspace)
        text = (workspace / "unzip.go").read_text(encoding="utf-8")
        self.assertTrue(text.startswith("package assets\n"))
        self.assertIn("func Unzip(path string, replace bool) error", text)

    def test_exclude_and_log(self):
        workspace, src = self.make_workspace()
        out = workspace / "bundle.py"
        proc = self.run_cli([str(src), "--lang", "python", "-x", "*.tmp", "-x", "notes", "-l", "-o", str(out)])
        self.assertEqual(proc.stdout.splitlines()[0], str(src) + "/")
        self.assertIn(str(src / "docs") + "/", proc.stdout)
        self.assertIn(str(src / "docs" / "readme.txt"), proc.stdout)
        self.assertNotIn("skip.tmp", proc.stdout)
        target = workspace / "extract"
        runpy.run_path(str(out))["unzip"](str(target))
        self.assertTrue((target / "docs" / "readme.txt").exists())
        self.assertFalse((target / "docs" / "notes").exists())
        self.assertFalse((target / "skip.tmp").exists())

    def test_bad_extension_is_usage_error(self):
        workspace, src = self.make_workspace()
        proc = self.run_cli([str(src), "-o", str(workspace / "out.txt")], expect=2)
        self.assertIn("Output file must have .go extension", proc.stderr)
        self.assertFalse((workspace / "out.txt").exists())

    def test_missing_path(self):
        workspace, _src = self.make_workspace()
        proc = self.run_cli([str(workspace / "nope")], expect=1, cwd=workspace)
        self.assertIn("Error:", proc.stderr)
        self.assertFalse((workspace / "unzip.go").exists())

    def test_no_path_argument(self):
        proc = self.run_cli([], expect=2)
        self.assertIn("usage:", proc.stderr)

    def test_version(self):
        proc = self.run_cli(["--version"])
        self.assertEqual(proc.stdout.strip(), f"zipembed {__version__}")


class InProcessCLITests(unittest.TestCase):
    def test_resolve_output(self):
        self.assertEqual(resolve_output(None), "unzip.go")
        self.assertEqual(resolve_output(None, "python"), "unzip.py")
        self.assertEqual(resolve_output("assets"), "assets.go")
        self.assertEqual(resolve_output("pkg/assets.py", "python"), "pkg/assets.py")
        self.assertEqual(resolve_output(".go"), ".go")
        self.assertEqual(resolve_output("out/.py", "python"), "out/.py")
        with self.assertRaises(UsageError):
            resolve_output("assets.py")
        with self.assertRaises(UsageError):
            resolve_output("assets.go", "python")
        with self.assertRaises(UsageError):
            resolve_output(".go", "python")

    def test_cmd_bundle_returns_size(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_bytes(b"hi")
            out = root / "data"
            with contextlib.redirect_stdout(io.StringIO()):
                size = cmd_bundle(str(root / "a.txt"), output=str(out), data_only=True, scheme="base64")
            written = root / "data.go"
            self.assertEqual(written.stat().st_size, size)
            self.assertNotIn("func Unzip", written.read_text(encoding="utf-8"))

    def test_main_exit_codes(self):
        with tempfile.TemporaryDirectory() as tmp:
            err = io.StringIO()
            with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as cm:
                main([os.path.join(tmp, "missing"), "-o", os.path.join(tmp, "x")])
            self.assertEqual(cm.exception.code, 1)
            with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as cm:
                main([tmp, "-o", os.path.join(tmp, "x.c")])
            self.assertEqual(cm.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
