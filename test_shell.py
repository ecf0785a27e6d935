from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from wadmake.directory import Directory
from wadmake.errors import ArgumentError, FormatError
from wadmake.shell import interact, new_environment, run_script, run_source

from wadfixture import EXPECTED_TWO_LUMPS, write_map_wad


class ScriptTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.wad_path = write_map_wad(self.tmp / "map.wad")
        self.env = new_environment()

    def run_lines(self, source: str):
        run_source(self.env, source)
        return self.env

    def test_create_directory(self):
        env = self.run_lines("lumps = wad.create_directory()")
        self.assertIsInstance(env["lumps"], Directory)
        self.assertEqual(len(env["lumps"]), 0)

    def test_read_container(self):
        env = self.run_lines(f"lumps, kind = wad.read_container({str(self.wad_path)!r})")
        self.assertEqual(env["kind"], "pwad")
        self.assertIsInstance(env["lumps"], Directory)
        self.assertEqual(len(env["lumps"]), 11)

    def test_parse_container(self):
        self.env["raw"] = self.wad_path.read_bytes()
        env = self.run_lines("lumps, kind = wad.parse_container(raw)\npos = lumps.find('SIDEDEFS')")
        self.assertEqual(env["pos"], 4)

    def test_edit_and_pack(self):
        env = self.run_lines(
            "lumps = wad.create_directory()\n"
            "lumps.insert('TEST', b'hissy')\n"
            "lumps.insert('TESTTWO', b'god only knows')\n"
            "packed = wad.pack_container(lumps)\n"
        )
        self.assertEqual(env["packed"], EXPECTED_TWO_LUMPS)

    def test_write_container(self):
        out = self.tmp / "out.wad"
        self.run_lines(
            "lumps = wad.create_directory()\n"
            "lumps.insert('TEST', b'hissy')\n"
            "lumps.insert('TESTTWO', b'god only knows')\n"
            f"wad.write_container(lumps, {str(out)!r})\n"
        )
        self.assertEqual(out.read_bytes(), EXPECTED_TWO_LUMPS)

    def test_script_edits_are_shared(self):
        env = self.run_lines(
            f"lumps, _ = wad.read_container({str(self.wad_path)!r})\n"
            "same = lumps\n"
            "same.remove(1)\n"
            "same.set(1, 'STUFF')\n"
        )
        self.assertIs(env["lumps"], env["same"])
        self.assertEqual(env["lumps"].get(1)[0], "STUFF")

    def test_pack_requires_directory(self):
        with self.assertRaises(ArgumentError) as ctx:
            self.run_lines("wad.pack_container([])")
        self.assertEqual(ctx.exception.param, "lumps")
        with self.assertRaises(ArgumentError):
            self.run_lines("wad.write_container('lumps', 'out.wad')")

    def test_parse_requires_bytes(self):
        with self.assertRaises(ArgumentError) as ctx:
            self.run_lines("wad.parse_container('PWAD')")
        self.assertEqual(ctx.exception.param, "data")

    def test_errors_reach_the_caller(self):
        with self.assertRaises(FormatError):
            self.run_lines("wad.parse_container(b'junk')")

    def test_errors_are_catchable_in_scripts(self):
        env = self.run_lines(
            "try:\n"
            "    wad.create_directory().remove(1)\n"
            "except wad.ArgumentError as exc:\n"
            "    caught = exc.param\n"
        )
        self.assertEqual(env["caught"], "index")

    def test_run_script_file(self):
        script = self.tmp / "count.py"
        script.write_text(f"lumps, kind = wad.read_container({str(self.wad_path)!r})\ncount = len(lumps)\n")
        run_script(self.env, str(script))
        self.assertEqual(self.env["count"], 11)

    def test_directory_constructor_checks_lumps(self):
        with self.assertRaises(ArgumentError) as ctx:
            self.run_lines("d = wad.Directory([wad.Lump('A', 'text')])")
        self.assertEqual(ctx.exception.param, "data")

    def test_run_script_file_keeps_environment(self):
        script = self.tmp / "edit.py"
        script.write_text("lumps.insert('B', b'y')\nfound = lumps.find('B')\n")
        self.run_lines("lumps = wad.create_directory()\nlumps.insert('A', b'x')")
        run_script(self.env, str(script))
        self.assertEqual(self.env["found"], 2)
        self.assertEqual(len(self.env["lumps"]), 2)
        self.assertIn("wad", self.env)

    def test_run_script_stdin(self):
        with mock.patch("sys.stdin", io.StringIO("lumps = wad.create_directory()\nlumps.insert('A', b'x')\n")):
            run_script(self.env, "-")
        self.assertEqual(self.env["lumps"].get(1), ("A", b"x"))


class InteractTests(unittest.TestCase):
    def test_console_session(self):
        env = new_environment()
        lines = [
            "lumps = wad.create_directory()",
            "lumps.insert('A', b'x')",
            "lumps.remove(5)",
            "lumps.insert('B', b'y')",
            EOFError(),
        ]
        stderr = io.StringIO()
        with mock.patch("builtins.input", side_effect=lines), mock.patch("sys.stderr", stderr):
            interact(env)
        self.assertEqual(len(env["lumps"]), 2)
        self.assertIn("WADmake shell", stderr.getvalue())
        self.assertIn("ArgumentError", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
