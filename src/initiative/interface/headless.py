"""
Headless runner for initiative.sh.

Provides a JSON I/O interface for programmatic control.
Input: JSON commands via stdin, one per line
Output: JSON responses via stdout, one per line

    {"cmd": "input", "text": "elderly elf"}
    {"cmd": "autocomplete", "text": "jo"}
    {"cmd": "status"}
    {"cmd": "quit"}
"""

import io
import json
import logging
import sys
from contextlib import contextmanager
from typing import Generator, TextIO

from ..app.app import App
from ..storage.store import DataStore, open_data_store
from .renderer import console, render_output

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@contextmanager
def capture_console_output() -> Generator[io.StringIO, None, None]:
    """
    Context manager to capture Rich console output.

    Rendered text is returned inside the JSON response instead of polluting
    the JSON stream on stdout.
    """
    original_file = console.file
    buffer = io.StringIO()

    try:
        console.file = buffer
        yield buffer
    finally:
        console.file = original_file


class HeadlessRunner:
    """
    Headless initiative.sh runner with JSON I/O.

    Commands are read from stdin as JSON objects.
    Responses are written to stdout as JSON.
    """

    def __init__(
        self,
        data_store: DataStore,
        seed: int | None = None,
        output: TextIO = sys.stdout,
        render: bool = False,
    ):
        self.app = App(data_store, seed=seed)
        self.output = output
        self.render = render
        self.welcome = self.app.init()

    def _write_json(self, obj: dict):
        self.output.write(json.dumps(obj) + "\n")
        self.output.flush()

    def _emit_response(self, response_type: str, **data):
        self._write_json({"type": response_type, **data})

    def handle_command(self, cmd: dict) -> dict:
        """Dispatch one command object and return the response payload."""
        name = cmd.get("cmd")

        if name == "input":
            text = cmd.get("text")
            if not isinstance(text, str):
                return {"ok": False, "error": "input requires a text string"}
            output = self.app.command(text)
            response = {"ok": not output.startswith("! "), "output": output}
            if self.render:
                with capture_console_output() as buffer:
                    render_output(output)
                response["rendered"] = buffer.getvalue()
            return response

        if name == "autocomplete":
            text = cmd.get("text", "")
            return {
                "ok": True,
                "suggestions": [
                    {"text": suggestion, "summary": summary}
                    for suggestion, summary in self.app.autocomplete(text)
                ],
            }

        if name == "status":
            return self._cmd_status()

        if name == "quit":
            return {"ok": True, "action": "quit"}

        return {"ok": False, "error": f"Unknown command: {name}"}

    def _cmd_status(self) -> dict:
        repository = self.app.repository
        return {
            "ok": True,
            "data_store_enabled": repository.data_store_enabled,
            "saved": len(repository.cache),
            "recent": len(repository.recent()),
            "time": repository.get_time().display_short(),
            "aliases": sorted(str(alias) for alias in self.app.meta.command_aliases),
        }

    def run(self, input: TextIO = sys.stdin):
        """
        Main loop: read JSON commands, write responses.

        One JSON object per line. Exit on EOF or quit command.
        """
        self._emit_response("ready", version=VERSION, welcome=self.welcome)

        for line in input:
            line = line.strip()
            if not line:
                continue

            try:
                cmd = json.loads(line)
            except json.JSONDecodeError as e:
                self._emit_response("error", error=f"Invalid JSON: {e}")
                continue

            if not isinstance(cmd, dict):
                self._emit_response("error", error="Expected a JSON object")
                continue

            result = self.handle_command(cmd)
            self._emit_response("result", **result)

            if result.get("action") == "quit":
                break


def run_headless(store: str = "json", data_dir: str = "initiative_data", seed: int | None = None):
    """Entry point for headless mode."""
    runner = HeadlessRunner(open_data_store(store, data_dir), seed=seed)
    runner.run()
