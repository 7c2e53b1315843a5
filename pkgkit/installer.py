"""
Package list installer

Walks AWAIT_LIST_FILE -> AWAIT_CONFIRMATION -> EXECUTE -> DONE, stopping
with a PkgKitError at any gate that fails.
"""

from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .errors import InstallationAbortedError, PackageListNotFoundError
from .logger import get_logger
from .package_managers import PackageManager
from .permissions import check_permissions

logger = get_logger(__name__)

CONFIRM_PROMPT = "Do you want to install all packages? (y/N): "
CONFIRM_ANSWERS = ('y', 'Y')


class InstallState(Enum):
    AWAIT_LIST_FILE = 'await_list_file'
    AWAIT_CONFIRMATION = 'await_confirmation'
    EXECUTE = 'execute'
    DONE = 'done'


class Installer:
    """Installs every package named in a package list file"""

    def __init__(self, manager: PackageManager, list_file: Path,
                 prompt: Callable[[str], str],
                 skip_confirm: bool = False,
                 dry_run: bool = True,
                 escalation_command: str = 'sudo',
                 permission_check: Callable[..., Optional[str]] = check_permissions):
        self.manager = manager
        self.list_file = Path(list_file)
        self.prompt = prompt
        self.skip_confirm = skip_confirm
        self.dry_run = dry_run
        self.escalation_command = escalation_command
        self.permission_check = permission_check
        self.state = InstallState.AWAIT_LIST_FILE

    def _confirmed(self) -> bool:
        if self.skip_confirm:
            logger.debug("Confirmation skipped")
            return True

        try:
            answer = self.prompt(CONFIRM_PROMPT)
        except EOFError:
            answer = ''
        # Exact match only; anything but y or Y declines
        return answer in CONFIRM_ANSWERS

    def run(self) -> None:
        """
        Install the package list.

        Raises:
            InsufficientPrivilegesError: not root and escalation unavailable
            PackageListNotFoundError: list file missing
            InstallationAbortedError: confirmation declined
            CommandExecutionError: an install command failed
        """
        escalate = self.permission_check(self.escalation_command)

        self.state = InstallState.AWAIT_LIST_FILE
        if not self.list_file.is_file():
            raise PackageListNotFoundError(self.list_file)

        self.state = InstallState.AWAIT_CONFIRMATION
        confirmed = self._confirmed()

        self.state = InstallState.EXECUTE
        if not confirmed:
            raise InstallationAbortedError()

        if self.dry_run:
            logger.info(f"Dry-run mode: {self.manager.name} commands are shown, not executed")
        self.manager.install(self.list_file, escalate=escalate, dry_run=self.dry_run)

        self.state = InstallState.DONE
        logger.info("All packages installed successfully.")
