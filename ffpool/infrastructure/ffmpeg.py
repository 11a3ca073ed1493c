import subprocess
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union
from ffpool.domain.exceptions import ToolUnavailableError

@dataclass
class ToolResult:
    return_code: int
    stdout: str
    stderr: str
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.return_code == 0

class FFmpegAdapter:
    """Wrapper around the external transcoder (ffmpeg unless configured otherwise)."""

    def __init__(self, tool: str = "ffmpeg", input_flag: str = "-i"):
        self.tool = tool
        self.input_flag = input_flag
        self.logger = logging.getLogger(__name__)

    def build_command(self, input_path: Union[str, Path], output_path: Union[str, Path], options: List[str]) -> List[str]:
        """Fixed argument shape: tool, input flag, input, user options, output last."""
        return [self.tool, self.input_flag, str(input_path), *options, str(output_path)]

    def run(self, input_path: Union[str, Path], output_path: Union[str, Path], options: List[str]) -> ToolResult:
        """Runs the tool to completion, capturing both streams.

        Raises ToolUnavailableError when the process cannot be started at all.
        A nonzero exit is not an exception; callers inspect the result.
        """
        cmd = self.build_command(input_path, output_path, options)
        self.logger.debug(f"TOOL_CMD: {' '.join(cmd)}")

        start_time = time.monotonic()
        try:
            # stdin detached so concurrent tools never prompt on the terminal
            res = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
            )
        except OSError as e:
            self.logger.error(f"TOOL_UNAVAILABLE: {self.tool}: {e}")
            raise ToolUnavailableError(self.tool, e) from e
        elapsed = time.monotonic() - start_time

        result = ToolResult(
            return_code=res.returncode,
            stdout=res.stdout.decode("utf-8", errors="replace") if res.stdout else "",
            stderr=res.stderr.decode("utf-8", errors="replace") if res.stderr else "",
            elapsed_seconds=elapsed,
        )
        self.logger.debug(f"TOOL_END: {Path(input_path).name} code={result.return_code} elapsed={elapsed:.2f}s")
        return result
