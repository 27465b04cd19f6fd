"""
Test cases for the command line, through typer's runner.
"""
import json
import logging
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from gesture_art.cli import app

from .helpers import open_pose, pinch_pose


def frame(t=None, pose=None, key=None):
    data = {}
    if t is not None:
        data["t"] = t
    data["landmarks"] = None if pose is None else pose.to_list()
    if key is not None:
        data["key"] = key
    return json.dumps(data)


class CLITestCase(unittest.TestCase):
    def setUp(self):
        # A handler already attached keeps the commands from binding one to the runner's streams
        self.logger = logging.getLogger("gesture_art")
        self.handler = logging.NullHandler()
        self.logger.addHandler(self.handler)
        self.addCleanup(self.logger.removeHandler, self.handler)

        directory = tempfile.TemporaryDirectory()
        self.addCleanup(directory.cleanup)
        self.directory = Path(directory.name)
        self.config_path = self.directory / "config.json"
        self.runner = CliRunner()

    def invoke(self, *args):
        return self.runner.invoke(app, [str(arg) for arg in args])


class TestReplay(CLITestCase):
    def write_recording(self, *lines):
        path = self.directory / "recording.jsonl"
        path.write_text("\n".join(lines) + "\n")
        return path

    def replay(self, *args):
        result = self.invoke("replay", *args, "--config", self.config_path)
        lines = [json.loads(line) for line in result.stdout.splitlines() if line.startswith("{")]
        return result, lines

    def test_replay(self):
        recording = self.write_recording(
            "# pinch then open hand",
            frame(0.0),
            *(frame(0.5 + i * 0.03, pinch_pose()) for i in range(6)),
            "",
            frame(1.0, key="o"),
            frame(1.1),
        )

        result, lines = self.replay(recording)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(len(lines), 9)
        self.assertEqual(lines[0]["mode"], "tree")
        self.assertFalse(lines[0]["hand_present"])
        self.assertEqual(lines[1]["mode"], "focus")
        self.assertEqual(lines[6]["gesture"], "pinch")
        self.assertEqual(lines[7]["mode"], "expanded")
        self.assertEqual(lines[8]["t"], 1.1)
        self.assertIsNone(lines[8]["control"])

    def test_missing_timestamps(self):
        recording = self.write_recording(frame(), frame(), frame(2.0), frame())

        _result, lines = self.replay(recording)

        self.assertEqual([line["t"] for line in lines], [0.0, round(1 / 30, 6), 2.0, round(2 + 1 / 30, 6)])

    def test_ready_at(self):
        recording = self.write_recording(*(frame(i * 0.1, open_pose()) for i in range(5)))

        _result, lines = self.replay(recording, "--ready-at", 100)

        self.assertEqual({line["mode"] for line in lines}, {"loading"})
        self.assertEqual(lines[-1]["gesture"], "open")

    def test_skip_loading(self):
        recording = self.write_recording(frame(0.5, open_pose()))

        _result, lines = self.replay(recording, "--ready-at", 100, "--skip-loading")

        self.assertEqual(lines[0]["mode"], "expanded")

    def test_rejected_sample(self):
        recording = self.write_recording(json.dumps({"t": 0.0, "landmarks": [[0.5, 0.5]] * 3}))

        result, lines = self.replay(recording)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(lines[0]["rejected"])
        self.assertFalse(lines[0]["hand_present"])

    def test_invalid_line(self):
        recording = self.write_recording(frame(0.0), '{"t": "soon"}')

        result, lines = self.replay(recording)

        self.assertEqual(result.exit_code, 1)
        self.assertEqual(len(lines), 1)

    def test_missing_recording(self):
        result = self.invoke("replay", self.directory / "nope.jsonl")
        self.assertNotEqual(result.exit_code, 0)


class TestInitConfig(CLITestCase):
    def test_init_config(self):
        result = self.invoke("init-config", "--config", self.config_path)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(self.config_path.is_file())
        self.assertIn("classifier", json.loads(self.config_path.read_text()))

    def test_existing_file(self):
        self.config_path.write_text("{}")

        result = self.invoke("init-config", "--config", self.config_path)
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(self.config_path.read_text(), "{}")

        result = self.invoke("init-config", "--config", self.config_path, "--force")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotEqual(self.config_path.read_text(), "{}")


if __name__ == "__main__":
    unittest.main()
