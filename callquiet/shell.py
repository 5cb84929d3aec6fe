import logging
import subprocess

from callquiet.errors import CommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


def run_command(args, timeout=DEFAULT_TIMEOUT, env=None):
    """
    Runs an external command and returns its stdout as text.
    Raises CommandError if the binary is missing, hangs, or exits non-zero.

    The child gets its own session so a Ctrl+C meant for the daemon
    does not kill a query that is already in flight.
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
            start_new_session=True,
            env=env,
        )
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {args[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {' '.join(args)}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise CommandError(f"{' '.join(args)} exited with {result.returncode}: {stderr}")

    if result.stderr and result.stderr.strip():
        logger.warning(f"{args[0]}: {result.stderr.strip()}")

    return result.stdout
