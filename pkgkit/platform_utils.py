"""
Platform Utilities Module

Provides host probing for PkgKit:
- Package manager detection in a fixed priority order
- Linux distribution information
- System command execution
"""

import logging
import platform
import shutil
import subprocess
from enum import Enum
from typing import Callable, List, Optional, Tuple

import distro

from .errors import UnsupportedPackageManagerError
from .logger import get_logger

logger = get_logger(__name__)


class PackageManagerKind(Enum):
    """Supported package managers, valued by the executable probed for"""

    APT = 'apt-get'
    PACMAN = 'pacman'
    DNF = 'dnf'
    YUM = 'yum'
    ZYPPER = 'zypper'

    @property
    def executable(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return 'apt' if self is PackageManagerKind.APT else self.value


# Probe order; first executable found wins
DETECTION_ORDER = (
    PackageManagerKind.APT,
    PackageManagerKind.PACMAN,
    PackageManagerKind.DNF,
    PackageManagerKind.YUM,
    PackageManagerKind.ZYPPER,
)


class PlatformUtils:
    """Platform-specific utility functions"""

    @classmethod
    def get_platform_info(cls) -> str:
        """Get detailed platform information"""
        system = platform.system()
        machine = platform.machine()

        if system == 'Linux':
            dist_name = ' '.join(part for part in (distro.name(), distro.version()) if part)
            return f"{dist_name or 'Linux'} ({machine})"
        return f"{system} ({machine})"

    @classmethod
    def run_command(cls, command: List[str], timeout: int = 30,
                    capture_output: bool = True,
                    stdin_path: Optional[str] = None) -> Tuple[bool, str, str]:
        """
        Run a system command

        Args:
            command: Command and arguments as list
            timeout: Timeout in seconds
            capture_output: Capture stdout/stderr instead of passing them through
            stdin_path: Optional file fed to the command's standard input

        Returns:
            Tuple of (success, stdout, stderr)
        """
        logger.debug(f"Running: {' '.join(command)}")
        try:
            if stdin_path:
                with open(stdin_path, 'r', encoding='utf-8') as stdin:
                    result = subprocess.run(
                        command,
                        stdin=stdin,
                        capture_output=capture_output,
                        text=True,
                        timeout=timeout,
                        check=False
                    )
            else:
                result = subprocess.run(
                    command,
                    capture_output=capture_output,
                    text=True,
                    timeout=timeout,
                    check=False
                )
            return (
                result.returncode == 0,
                result.stdout if capture_output else "",
                result.stderr if capture_output else ""
            )
        except subprocess.TimeoutExpired:
            return (False, "", f"Command timed out after {timeout} seconds")
        except FileNotFoundError:
            return (False, "", f"Command not found: {command[0]}")


def detect_package_manager(which: Callable[[str], Optional[str]] = shutil.which) -> PackageManagerKind:
    """
    Select the package manager of this host.

    Probes apt-get, pacman, dnf, yum and zypper in that order and returns the
    first one present on PATH.

    Raises:
        UnsupportedPackageManagerError: none of them is installed
    """
    for kind in DETECTION_ORDER:
        if which(kind.executable):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Detected package manager %s on %s", kind.label, PlatformUtils.get_platform_info())
            return kind

    raise UnsupportedPackageManagerError()
