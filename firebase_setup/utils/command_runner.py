"""
Command Runner for Firebase KMP Setup
Single seam for invoking gcloud, firebase and other external programs
"""

from dataclasses import dataclass, field
import logging
import shutil
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


def is_tool_available(name):
    """Return True when an executable is found on PATH"""
    return shutil.which(name) is not None


@dataclass
class CommandResult:
    args: list
    returncode: int
    stdout: bytes = b''
    stderr: bytes = b''

    @property
    def ok(self):
        return self.returncode == 0

    @property
    def text(self):
        return self.stdout.decode('utf-8', errors='replace')

    @property
    def error_text(self):
        return self.stderr.decode('utf-8', errors='replace')


@dataclass
class CommandRunner:
    """
    Runs external commands synchronously.

    Captured calls return stdout/stderr as raw bytes so downloaded payloads
    can be written back byte-for-byte. Interactive calls (logins) inherit the
    terminal and only report the exit status.
    """
    timeout: Optional[float] = None
    history: list = field(default_factory=list)

    def run(self, args, interactive=False):
        args = [str(arg) for arg in args]
        logger.debug(f"Running: {' '.join(args)}")
        self.history.append(args)

        try:
            if interactive:
                # logins block until the operator finishes or aborts
                completed = subprocess.run(args, check=False, timeout=None)
                return CommandResult(args, completed.returncode)

            completed = subprocess.run(args, capture_output=True, check=False, timeout=self.timeout)
            return CommandResult(args, completed.returncode, completed.stdout or b'', completed.stderr or b'')

        except FileNotFoundError as e:
            logger.debug(f"Executable not found: {args[0]}")
            return CommandResult(args, 127, b'', str(e).encode('utf-8'))
        except subprocess.TimeoutExpired:
            logger.debug(f"Timed out after {self.timeout}s: {' '.join(args)}")
            return CommandResult(args, 124, b'', f"Timed out after {self.timeout}s".encode('utf-8'))
