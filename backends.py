"""Native backend capability interface.

Two backends talk to the native reminders store: a compiled reader for
queries and the scripting interpreter for writes. Both are built from one
immutable BackendConfig that is resolved once at startup and passed in
explicitly.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from config import Settings
from process_runner import ProcessResult, run_process

DEFAULT_READER_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "bin", "GetReminders"
)
TEST_MODE_READER_PATH = "/test-mode/bin/GetReminders"
TEST_MODE_OSASCRIPT_PATH = "/test-mode/bin/osascript"


class Access(str, Enum):
    """What a tool does to the native store"""
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class BackendConfig:
    reader_path: str
    reader_timeout: float = 10.0
    osascript_path: str = "osascript"
    writer_timeout: float = 10.0


def resolve_reader_path(reader_binary_path: Optional[str], test_mode: bool) -> str:
    """Locate the compiled reader.

    Test mode always yields a path that cannot be executed.
    """
    if test_mode:
        return TEST_MODE_READER_PATH
    if reader_binary_path:
        return os.path.abspath(os.path.expanduser(reader_binary_path))
    return DEFAULT_READER_PATH


def backend_config_from_settings(settings: Settings) -> BackendConfig:
    return BackendConfig(
        reader_path=resolve_reader_path(settings.READER_BINARY_PATH, settings.TEST_MODE),
        reader_timeout=settings.READER_TIMEOUT,
        osascript_path=TEST_MODE_OSASCRIPT_PATH if settings.TEST_MODE else settings.OSASCRIPT_PATH,
        writer_timeout=settings.WRITER_TIMEOUT,
    )


class NativeBackend:
    """Base for the reader and writer backends."""

    access: Access

    def __init__(self, config: BackendConfig):
        self.config = config

    async def _execute(self, argv: Sequence[str], timeout: float) -> ProcessResult:
        return await run_process(argv, timeout)
