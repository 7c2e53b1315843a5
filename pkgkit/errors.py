"""
Error taxonomy for PkgKit

Every fatal condition maps to a process exit code:
    0  success
    1  insufficient privileges
    2  unsupported package manager
    3  package list file not found
    4  installation aborted by user
    5  unknown option
    6  package manager command failed
"""

from typing import Optional


class PkgKitError(Exception):
    """Base class for fatal PkgKit errors"""

    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InsufficientPrivilegesError(PkgKitError):
    exit_code = 1


class UnsupportedPackageManagerError(PkgKitError):
    exit_code = 2

    def __init__(self, message: str = "Error: Unsupported package manager. Exiting."):
        super().__init__(message)


class PackageListNotFoundError(PkgKitError):
    exit_code = 3

    def __init__(self, path):
        super().__init__(f"Error: No pkglist found at {path}. Exiting.")
        self.path = path


class InstallationAbortedError(PkgKitError):
    exit_code = 4

    def __init__(self, message: str = "Installation aborted."):
        super().__init__(message)


class UnknownOptionError(PkgKitError):
    exit_code = 5

    def __init__(self, token: str):
        super().__init__(f"Unknown option: {token}. Use -h or --help for help.")
        self.token = token


class CommandExecutionError(PkgKitError):
    """A package manager command exited non-zero, timed out or was not found"""

    exit_code = 6

    def __init__(self, command, stderr: str = ""):
        cmd_text = ' '.join(command)
        detail = stderr.strip()
        message = f"Error: Command failed: {cmd_text}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.command = list(command)
        self.stderr = stderr
