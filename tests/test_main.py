import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import main
from wordsearch.core.models import Stage
from wordsearch.engine.controller import GameConfig, GameController


class GenerateCommandTests(unittest.TestCase):
    def test_words_mode_prints_grid_json(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main.main(["--words", "cat", "dog", "--size", "6", "--seed", "1"])
        self.assertEqual(code, 0)

        payload = json.loads(buffer.getvalue())
        self.assertEqual(payload["size"], 6)
        self.assertEqual(len(payload["rows"]), 6)
        self.assertTrue(all(len(row) == 6 for row in payload["rows"]))
        for placement in payload["placements"]:
            spelled = "".join(payload["rows"][r][c] for r, c in placement["cells"])
            self.assertEqual(spelled, placement["word"].upper())

    def test_words_mode_writes_output_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "grid.json"
            with redirect_stdout(io.StringIO()):
                main.main(["--words", "sun", "--size", "4", "--output", str(output)])
            payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["size"], 4)

    def test_output_requires_words(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main.main(["--output", "grid.json"])


class HandleCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        stage = Stage(name="Animals", difficulty="easy", words=("cat", "dog"))
        self.controller = GameController(stages=[stage], config=GameConfig(seed=3))
        self.controller.load_stage(0)

    def test_quit_stops_loop(self) -> None:
        self.assertFalse(main.handle_command(self.controller, "quit"))

    def test_coordinates_toggle_cells(self) -> None:
        self.assertTrue(main.handle_command(self.controller, "2 3"))
        self.assertEqual([(c.row, c.col) for c in self.controller.state.selection], [(2, 3)])
        main.handle_command(self.controller, "clear")
        self.assertEqual(self.controller.state.selection, [])

    def test_new_and_unknown_commands(self) -> None:
        main.handle_command(self.controller, "new")
        self.assertEqual(self.controller.state.stage_index, 0)
        with redirect_stdout(io.StringIO()) as buffer:
            self.assertTrue(main.handle_command(self.controller, "dance"))
        self.assertIn("Unknown command", buffer.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
