"""
Package Manager Dispatch

One PackageManager implementation per supported family. Each knows how to
count installed packages, list them in the package list file format of that
family, and replay a package list file.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Type

from .errors import CommandExecutionError, UnsupportedPackageManagerError
from .logger import get_logger
from .package_list import read_package_names
from .platform_utils import PackageManagerKind, PlatformUtils

logger = get_logger(__name__)

# Rows of `list installed` style output carrying a name.arch token
ARCH_SUFFIX = re.compile(r'\.[a-zA-Z]')


@dataclass(frozen=True)
class InstallStep:
    """A single install command, optionally fed a file on stdin"""

    command: List[str]
    stdin_path: Optional[Path] = None

    def escalated(self, prefix: Optional[str]) -> 'InstallStep':
        if not prefix:
            return self
        return InstallStep([prefix] + self.command, self.stdin_path)

    def render(self) -> str:
        text = ' '.join(self.command)
        if self.stdin_path is not None:
            text += f" < {self.stdin_path}"
        return text


class PackageManager(ABC):
    """Capability interface over one native package manager"""

    # Listing used by count() and the line filter applied to it
    count_command: List[str] = []
    count_pattern: Optional[re.Pattern] = None

    # Listing used by list_installed(), its filter and the column kept
    list_command: List[str] = []
    list_pattern: Optional[re.Pattern] = None
    list_field: Optional[int] = None

    def __init__(self, kind: PackageManagerKind,
                 runner: Optional[Callable] = None,
                 timeout: int = 300):
        self.kind = kind
        self.runner = runner or PlatformUtils.run_command
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.kind.label

    def _listing(self, command: List[str]) -> List[str]:
        success, stdout, stderr = self.runner(command, timeout=self.timeout)
        if not success:
            raise CommandExecutionError(command, stderr)
        return [line for line in stdout.splitlines() if line.strip()]

    def count(self) -> int:
        """Number of installed packages"""
        lines = self._listing(self.count_command)
        if self.count_pattern is None:
            return len(lines)
        return sum(1 for line in lines if self.count_pattern.search(line))

    def list_installed(self) -> List[str]:
        """Installed packages, one package list file line each"""
        entries = []
        for line in self._listing(self.list_command):
            if self.list_pattern is not None and not self.list_pattern.search(line):
                continue
            if self.list_field is None:
                entries.append(line.rstrip())
                continue
            fields = line.split()
            if len(fields) > self.list_field:
                entries.append(fields[self.list_field])
        return entries

    @abstractmethod
    def install_commands(self, list_file: Path) -> List[InstallStep]:
        """Commands that install everything named in list_file"""

    def install(self, list_file: Path, escalate: Optional[str] = None,
                dry_run: bool = True) -> List[InstallStep]:
        """
        Replay list_file through the native package manager.

        Args:
            list_file: Package list file written by generate
            escalate: Privilege escalation prefix (e.g. sudo), None when root
            dry_run: Only log the commands instead of running them

        Returns:
            The steps that were run, or would have run in dry-run mode
        """
        steps = [step.escalated(escalate) for step in self.install_commands(list_file)]

        for step in steps:
            if dry_run:
                logger.info(f"[dry-run] would run: {step.render()}")
                continue

            logger.info(f"Running: {step.render()}")
            success, _, stderr = self.runner(
                step.command,
                timeout=self.timeout,
                capture_output=False,
                stdin_path=str(step.stdin_path) if step.stdin_path else None
            )
            if not success:
                raise CommandExecutionError(step.command, stderr)

        return steps


class AptManager(PackageManager):
    count_command = ['dpkg', '--get-selections']
    count_pattern = re.compile(r'\sinstall$')
    list_command = ['dpkg', '--get-selections']

    def install_commands(self, list_file: Path) -> List[InstallStep]:
        return [
            InstallStep(['dpkg', '--set-selections'], stdin_path=list_file),
            InstallStep(['apt-get', '-y', 'dselect-upgrade']),
        ]


class PacmanManager(PackageManager):
    count_command = ['pacman', '-Q']
    list_command = ['pacman', '-Qq']

    def install_commands(self, list_file: Path) -> List[InstallStep]:
        return [InstallStep(['pacman', '-S', '--needed', '-'], stdin_path=list_file)]


class YumManager(PackageManager):
    """dnf and yum share one command line; the detected binary is used"""

    count_pattern = ARCH_SUFFIX
    list_pattern = ARCH_SUFFIX
    list_field = 0

    def __init__(self, kind: PackageManagerKind, *args, **kwargs):
        super().__init__(kind, *args, **kwargs)
        self.count_command = [kind.executable, 'list', 'installed']
        self.list_command = [kind.executable, 'list', 'installed']

    def install_commands(self, list_file: Path) -> List[InstallStep]:
        return [InstallStep([self.kind.executable, 'install'] + read_package_names(list_file))]


class ZypperManager(PackageManager):
    count_command = ['zypper', 'se', '--installed-only']
    count_pattern = ARCH_SUFFIX
    list_command = ['zypper', 'se', '--installed-only']
    list_pattern = ARCH_SUFFIX
    list_field = 2

    def install_commands(self, list_file: Path) -> List[InstallStep]:
        return [InstallStep(['zypper', 'install'] + read_package_names(list_file))]


MANAGERS: Dict[PackageManagerKind, Type[PackageManager]] = {
    PackageManagerKind.APT: AptManager,
    PackageManagerKind.PACMAN: PacmanManager,
    PackageManagerKind.DNF: YumManager,
    PackageManagerKind.YUM: YumManager,
    PackageManagerKind.ZYPPER: ZypperManager,
}


def get_package_manager(kind: Optional[PackageManagerKind],
                        runner: Optional[Callable] = None,
                        timeout: int = 300) -> PackageManager:
    """
    Build the implementation for kind.

    Raises:
        UnsupportedPackageManagerError: kind has no registered implementation
    """
    manager_cls = MANAGERS.get(kind)
    if manager_cls is None:
        raise UnsupportedPackageManagerError()
    return manager_cls(kind, runner=runner, timeout=timeout)
