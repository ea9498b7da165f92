import logging
import subprocess
from typing import Sequence

from usb_vlan_agent.models.command_result import CommandResult
from usb_vlan_agent.models.runcommand_error import RunCommandError

logger = logging.getLogger(__name__)


def run_command(cmd: Sequence[str], raise_on_fail: bool = False) -> CommandResult:
    """Run a single CLI command with subprocess and returns the output.

    Blocks until the process exits. Both pipes are drained before the child is
    reaped, so a chatty command can't wedge on a full pipe buffer.
    """
    cmd = [str(part) for part in cmd]
    logger.debug(f"Running command: {' '.join(cmd)}")
    try:
        cp = subprocess.run(
            cmd,
            encoding="utf-8",
            errors="replace",
            check=False,
            capture_output=True,
        )
    except OSError as e:
        result = CommandResult("", f"Failed to execute: {e}", 127, cmd)
    else:
        result = CommandResult(cp.stdout, cp.stderr, cp.returncode, cmd)

    if raise_on_fail and not result.success:
        raise RunCommandError(result.stderr, result.return_code)
    return result
