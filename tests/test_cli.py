import contextlib
import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from typing import Tuple
from unittest.mock import patch

import main
from tamil_crossword.io.backend_client import RemotePuzzleStore
from tamil_crossword.io.store import LocalPuzzleStore, WriteThroughStore


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmp.name)
        self.base = ["--store-dir", str(self.tmpdir), "--date", "2024-03-01", "--log-level", "ERROR"]
        env = patch.dict(os.environ, {"CROSSWORD_BACKEND_URL": ""})
        env.start()
        self.addCleanup(env.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> int:
        with contextlib.redirect_stdout(io.StringIO()):
            return main.main([*self.base, *argv])

    def stored(self) -> dict:
        path = self.tmpdir / "murli-puzzle-2024-03-01.json"
        return json.loads(path.read_text(encoding="utf-8"))

    def test_add_auto_and_manual(self) -> None:
        self.assertEqual(self.run_cli("add", "--clue", "mother", "--answer", "அம்மா"), 0)
        self.assertEqual(self.run_cli("add", "--clue", "evening", "--answer", "மாலை"), 0)
        self.assertEqual(
            self.run_cli(
                "add", "--clue", "sea", "--answer", "கடல்",
                "--row", "0", "--col", "0", "--direction", "across", "--length", "3",
            ),
            0,
        )
        questions = self.stored()["questions"]
        self.assertEqual([q["a"] for q in questions], ["அம்மா", "மாலை", "கடல்"])
        self.assertEqual(questions[1]["dir"], "DOWN")

    def test_rejected_placement_leaves_store_untouched(self) -> None:
        self.run_cli("add", "--clue", "mother", "--answer", "அம்மா")
        self.assertEqual(self.run_cli("add", "--clue", "sea", "--answer", "கடல்"), 1)
        self.assertEqual(len(self.stored()["questions"]), 1)

    def test_edit_delete_and_check(self) -> None:
        self.run_cli("add", "--clue", "mother", "--answer", "அம்மா")
        self.run_cli("add", "--clue", "evening", "--answer", "மாலை")
        self.assertEqual(self.run_cli("edit", "2", "--clue", "dusk"), 0)
        self.assertEqual(self.stored()["questions"][1]["q"], "dusk")

        answers = self.tmpdir / "answers.json"
        answers.write_text(
            json.dumps({"5,3": "அ", "5,4": "ம்", "5,5": "மா", "6,5": "லை"}, ensure_ascii=False),
            encoding="utf-8",
        )
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main.main([*self.base, "check", str(answers)])
        self.assertEqual(code, 0)
        self.assertIn("Score: 2/2", out.getvalue())

        self.assertEqual(self.run_cli("delete", "1"), 0)
        self.assertEqual([q["a"] for q in self.stored()["questions"]], ["மாலை"])
        self.assertEqual(self.run_cli("delete", "5"), 1)

    def capture(self, *argv: str) -> Tuple[int, str]:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main.main([*self.base, *argv])
        return code, out.getvalue()

    def write_answers(self, answers: dict) -> Path:
        path = self.tmpdir / "answers.json"
        path.write_text(json.dumps(answers, ensure_ascii=False), encoding="utf-8")
        return path

    def test_check_uses_codepoint_split(self) -> None:
        self.run_cli("--codepoint-split", "add", "--clue", "mother", "--answer", "அம்மா")
        grid = self.stored()["grid"]
        answers = {f"5,{c}": grid[5][c]["letter"] for c in range(2, 7)}
        self.assertEqual(answers["5,4"], "்")
        code, out = self.capture("--codepoint-split", "check", str(self.write_answers(answers)))
        self.assertEqual(code, 0)
        self.assertIn("Score: 1/1", out)

    def test_non_default_grid_size(self) -> None:
        size = ["--grid-size", "7"]
        self.assertEqual(self.run_cli(*size, "add", "--clue", "mother", "--answer", "அம்மா"), 0)
        self.assertEqual(self.run_cli(*size, "add", "--clue", "evening", "--answer", "மாலை"), 0)
        stored = self.stored()
        self.assertEqual(len(stored["grid"]), 7)
        self.assertEqual(stored["questions"][1]["row"], 3)
        self.assertEqual(stored["questions"][1]["col"], 4)

        code, out = self.capture(*size, "show")
        self.assertEqual(code, 0)
        self.assertIn("2 entries, 4 cells, 1 crossings", out)

        answers = self.write_answers({"3,2": "அ", "3,3": "ம்", "3,4": "மா", "4,4": "லை"})
        code, out = self.capture(*size, "check", "--json", str(answers))
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["correct_count"], 2)

        # A 7x7 snapshot is rejected by a 10x10 reader.
        self.assertEqual(self.run_cli("show"), 1)

    def test_auto_add_declared_length(self) -> None:
        self.assertEqual(
            self.run_cli("add", "--clue", "mother", "--answer", "அம்மா", "--length", "5"), 1
        )
        self.assertFalse((self.tmpdir / "murli-puzzle-2024-03-01.json").exists())

    def test_show_json_import_and_list(self) -> None:
        self.run_cli("add", "--clue", "mother", "--answer", "அம்மா")
        code, out = self.capture("show", "--json")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), self.stored())

        exported = self.tmpdir / "export.json"
        exported.write_text(out, encoding="utf-8")
        other = ["--store-dir", str(self.tmpdir), "--date", "2024-03-02", "--log-level", "ERROR"]
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertEqual(main.main([*other, "import", str(exported)]), 0)
        imported = json.loads(
            (self.tmpdir / "murli-puzzle-2024-03-02.json").read_text(encoding="utf-8")
        )
        self.assertEqual(imported["date"], "2024-03-02")
        self.assertEqual(imported["questions"], self.stored()["questions"])

        code, out = self.capture("list")
        self.assertEqual(out.split(), ["2024-03-01", "2024-03-02"])

    def test_import_rejects_broken_snapshot(self) -> None:
        broken = self.tmpdir / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        self.assertEqual(self.run_cli("import", str(broken)), 1)
        self.assertFalse((self.tmpdir / "murli-puzzle-2024-03-01.json").exists())


class GatewaySelectionTests(unittest.TestCase):
    def parse(self, *argv: str):
        return main.build_parser().parse_args(["--store-dir", self.tmpdir, *argv, "show"])

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_local_store_without_backend(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            gateway = main.open_gateway(self.parse())
        self.assertIsInstance(gateway, LocalPuzzleStore)

    def test_backend_url_from_environment(self) -> None:
        env = {"CROSSWORD_BACKEND_URL": "https://b.example", "CROSSWORD_BACKEND_TIMEOUT": "3"}
        with patch.dict(os.environ, env, clear=True):
            gateway = main.open_gateway(self.parse())
        self.assertIsInstance(gateway, WriteThroughStore)
        self.assertEqual(gateway.primary.config.base_url, "https://b.example")
        self.assertEqual(gateway.primary.config.timeout_seconds, 3.0)
        self.assertIsInstance(gateway.mirror, LocalPuzzleStore)

    def test_flag_overrides_environment(self) -> None:
        with patch.dict(os.environ, {"CROSSWORD_BACKEND_URL": "https://env.example"}, clear=True):
            gateway = main.open_gateway(
                self.parse("--backend-url", "https://flag.example", "--no-local-copy")
            )
        self.assertIsInstance(gateway, RemotePuzzleStore)
        self.assertEqual(gateway.config.base_url, "https://flag.example")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
