import subprocess
from abc import ABC, abstractmethod

from huntress_probe.schemas.health import CommandResult


class CommandRunner(ABC):
    """Runs one external command and captures its output and exit code."""

    @abstractmethod
    def run(self, args: list[str]) -> CommandResult:
        ...


class SubprocessCommandRunner(CommandRunner):
    def __init__(self, timeout: float = 30):
        self.timeout = timeout

    def run(self, args: list[str]) -> CommandResult:
        """Run *args* without a shell. OSError from spawning propagates."""
        try:
            r = subprocess.run(
                args, shell=False, capture_output=True, text=True, errors="replace", timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(returncode=-1, stderr="command timed out")
        return CommandResult(returncode=r.returncode, stdout=r.stdout.strip(), stderr=r.stderr.strip())
