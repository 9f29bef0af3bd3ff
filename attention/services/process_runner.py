from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import QProcess

from attention.domain.interfaces import IProcessRunner


class QtProcessRunner(IProcessRunner):
    """Runs helper programs (`open`, `osascript`) through QProcess."""

    def start_detached(self, program: str, args: Sequence[str]) -> bool:
        ok, _pid = QProcess.startDetached(program, list(args))
        return bool(ok)

    def run(self, program: str, args: Sequence[str], timeout_ms: int = 5000) -> tuple[int, str]:
        proc = QProcess()
        proc.setProgram(program)
        proc.setArguments(list(args))
        proc.start()
        if not proc.waitForStarted(timeout_ms):
            raise OSError(f"Could not start {program}")
        if not proc.waitForFinished(timeout_ms):
            proc.kill()
            proc.waitForFinished(1000)
            raise TimeoutError(f"{program} did not finish within {timeout_ms} ms")
        out = bytes(proc.readAllStandardOutput()).decode("utf-8", errors="replace")
        return proc.exitCode(), out
