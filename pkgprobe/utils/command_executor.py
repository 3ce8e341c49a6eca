import os
import subprocess
from typing import NamedTuple

from ..cli_logger import logger
from ..errors import CommandError, FailureError


class ProcessOutput(NamedTuple):
    returncode: int
    stdout: bytes
    stderr: bytes


def run_command(command, environ=None):
    """
    Executes a pkg-config command and returns its standard output.

    Args:
        command (PkgConfigCommand): argv and environment overrides.
        environ (Mapping, optional): Base environment for the child process.
            Defaults to ``os.environ``.

    Returns:
        bytes: The captured standard output.

    Raises:
        CommandError: If the process could not be started.
        FailureError: If the process exited with a nonzero status.
    """
    env = dict(os.environ if environ is None else environ)
    env.update(command.env)
    description = command.describe()
    logger.debug(f"Running {description}")

    try:
        result = subprocess.run(
            list(command.argv),
            capture_output=True,
            env=env,
            check=False,
        )
    except OSError as e:
        logger.debug(f"Could not start {command.argv[0]}: {e}")
        raise CommandError(description, e) from e

    output = ProcessOutput(result.returncode, result.stdout, result.stderr)
    if output.returncode != 0:
        logger.debug(f"{command.argv[0]} exited with status {output.returncode}")
        raise FailureError(description, output)
    return output.stdout
