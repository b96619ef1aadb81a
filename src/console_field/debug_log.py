import time
from pathlib import Path

from console_field.types import CompletionResult, ts_str

INPUT_LOG = "console_input.log"
COMPLETION_LOG = "console_completion.log"


class DebugLogger:
    """Manages optional debug log files for submitted input and completions."""

    def __init__(self, directory: str | Path = "."):
        self.enabled = False
        self.directory = Path(directory)
        self._input_fh = None
        self._completion_fh = None

    def start(self):
        self.directory.mkdir(parents=True, exist_ok=True)
        self._input_fh = open(self.directory / INPUT_LOG, "a", encoding="utf-8")
        self._completion_fh = open(self.directory / COMPLETION_LOG, "a", encoding="utf-8")
        self.enabled = True
        sep = f"\n{'='*60}\n  Session started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n{'='*60}\n"
        for fh in (self._input_fh, self._completion_fh):
            fh.write(sep)
            fh.flush()

    def stop(self):
        self.enabled = False
        for fh in (self._input_fh, self._completion_fh):
            if fh:
                fh.close()
        self._input_fh = self._completion_fh = None

    def toggle(self) -> bool:
        if self.enabled:
            self.stop()
        else:
            self.start()
        return self.enabled

    def log_command(self, text: str, dispatched: str):
        if not self.enabled or not self._input_fh:
            return
        self._input_fh.write(f"{ts_str(time.time())} RUN | {text!r} -> {dispatched!r}\n")
        self._input_fh.flush()

    def log_history(self, direction: str, text: str):
        if not self.enabled or not self._input_fh:
            return
        self._input_fh.write(f"{ts_str(time.time())} {direction:>4} | {text!r}\n")
        self._input_fh.flush()

    def log_completion(self, text: str, cursor: int, result: CompletionResult):
        if not self.enabled or not self._completion_fh:
            return
        self._completion_fh.write(
            f"{ts_str(time.time())} | {text!r}@{cursor} -> {result.text!r}@{result.cursor}"
            f" | arg {result.arg_num} | {len(result.candidates)} candidates\n"
        )
        for line in result.lines:
            self._completion_fh.write(f"{ts_str(time.time())} |   {line}\n")
        self._completion_fh.flush()
