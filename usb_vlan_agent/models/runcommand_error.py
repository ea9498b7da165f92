class RunCommandError(Exception):
    """Raised by run_command when a command exits non-zero and raise_on_fail is set"""

    def __init__(self, error_msg: str, return_code: int):
        super().__init__(error_msg)
        self.error_msg = error_msg
        self.return_code = return_code

    def __str__(self) -> str:
        return f"{self.error_msg.strip() or 'no error output'} (exit code {self.return_code})"
