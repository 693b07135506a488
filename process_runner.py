"""Awaitable child-process execution shared by both native backends.

A call spawns exactly one process and suspends only the awaiting coroutine
until the process exits or its timeout expires. On timeout the child is killed
and reaped before ``ExecutionError("timeout")`` is raised; a cancelled call
kills and reaps it too.
"""

import asyncio
from dataclasses import dataclass
from typing import Sequence

from errors import ExecutionError
from logger_config import setup_logger

logger = setup_logger(__name__, 'backend.log')


@dataclass(frozen=True)
class ProcessResult:
    """A finished process: exit code and decoded output streams."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


async def _kill_and_reap(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        pass  # exited before the kill
    # a second cancellation must not leave the child unreaped
    await asyncio.shield(process.wait())


async def run_process(argv: Sequence[str], timeout: float) -> ProcessResult:
    """Run ``argv`` without a shell and wait for it to finish.

    Args:
        argv: Program and arguments
        timeout: Seconds to wait before the process is killed

    Returns:
        ProcessResult with the exit code and captured output

    Raises:
        ExecutionError: the program cannot be started, or it timed out
    """
    program = argv[0]
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        logger.error(f"Executable not found: {program}")
        raise ExecutionError(f"executable not found: {program}")
    except PermissionError:
        logger.error(f"Executable not runnable: {program}")
        raise ExecutionError(f"executable not runnable: {program}")
    except OSError as e:
        logger.error(f"Failed to start {program}: {e}")
        raise ExecutionError(f"failed to start {program}", str(e))

    logger.info(f"Spawned {program} (PID: {process.pid})")
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{program} (PID: {process.pid}) exceeded {timeout}s, killing")
        await _kill_and_reap(process)
        raise ExecutionError("timeout", f"{program} did not finish within {timeout}s")
    except BaseException:
        logger.warning(f"Call waiting on {program} (PID: {process.pid}) was abandoned, killing")
        await _kill_and_reap(process)
        raise

    result = ProcessResult(
        exit_code=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    logger.info(f"{program} (PID: {process.pid}) exited with {result.exit_code}")
    return result
