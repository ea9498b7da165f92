from typing import Sequence


class CommandResult:
    """Returned by run_command"""

    def __init__(
        self, stdout: str, stderr: str, return_code: int, cmd: Sequence[str] = ()
    ):
        self.stdout = stdout
        self.stderr = stderr
        self.return_code = return_code
        self.cmd = list(cmd)
        self.success = self.return_code == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.cmd)

    def error_contains(self, text: str) -> bool:
        """True if the captured stderr mentions the given text."""
        return text in self.stderr

    def __repr__(self) -> str:
        return (
            f"CommandResult(cmd={self.command_line!r}, return_code={self.return_code}, "
            f"stdout={self.stdout!r}, stderr={self.stderr!r})"
        )
