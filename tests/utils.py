"""Test utilities and helpers for PkgKit test suite"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pkgkit.package_managers import InstallStep, PackageManager

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent

DPKG_SELECTIONS = (
    "adduser\t\t\t\t\t\tinstall\n"
    "apt\t\t\t\t\t\t\tinstall\n"
    "libfoo1:amd64\t\t\t\t\tdeinstall\n"
    "zsh\t\t\t\t\t\t\tinstall\n"
)

PACMAN_Q = "bash 5.2.015-1\ncoreutils 9.1-3\nlinux 6.1.1.arch1-1\n"
PACMAN_QQ = "bash\ncoreutils\nlinux\n"

YUM_LIST_INSTALLED = (
    "Loaded plugins: fastestmirror\n"
    "Installed Packages\n"
    "bash.x86_64                 5.1.8-6.el9          @baseos\n"
    "glibc.x86_64                2.34-60.el9          @baseos\n"
    "tzdata.noarch               2023c-1.el9          @baseos\n"
)

ZYPPER_SE_INSTALLED = (
    "Loading repository data...\n"
    "Reading installed packages...\n"
    "\n"
    "S  | Name          | Summary             | Type\n"
    "---+---------------+---------------------+--------\n"
    "i+ | yast2.core    | YaST2 core library  | package\n"
    "i  | libqt5.widget | Qt widgets          | package\n"
)


class FakeRunner:
    """Stands in for PlatformUtils.run_command and records every call"""

    def __init__(self, outputs: Optional[Dict[Tuple[str, ...], Tuple[bool, str, str]]] = None,
                 default: Tuple[bool, str, str] = (True, "", "")):
        self.outputs = outputs or {}
        self.default = default
        self.calls: List[dict] = []

    def __call__(self, command, timeout=30, capture_output=True, stdin_path=None):
        self.calls.append({
            'command': list(command),
            'timeout': timeout,
            'capture_output': capture_output,
            'stdin_path': stdin_path,
        })
        return self.outputs.get(tuple(command), self.default)

    @property
    def commands(self) -> List[List[str]]:
        return [call['command'] for call in self.calls]


class FakePackageManager(PackageManager):
    """In-memory package manager for CLI level tests"""

    def __init__(self, kind, packages=None, runner=None, timeout=300):
        super().__init__(kind, runner=runner or FakeRunner(), timeout=timeout)
        self.packages = list(packages or ['bash', 'coreutils', 'vim'])
        self.install_calls: List[dict] = []

    def count(self) -> int:
        return len(self.packages)

    def list_installed(self) -> List[str]:
        return list(self.packages)

    def install_commands(self, list_file: Path) -> List[InstallStep]:
        return [InstallStep(['fake-pm', 'install', '-'], stdin_path=list_file)]

    def install(self, list_file, escalate=None, dry_run=True):
        self.install_calls.append({'list_file': list_file, 'escalate': escalate, 'dry_run': dry_run})
        return super().install(list_file, escalate=escalate, dry_run=dry_run)
