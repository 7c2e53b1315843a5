"""
Privilege checks run before installing packages.

The check predicts whether the later install commands can be elevated; it
is not atomic with them.
"""

import os
import shutil
from typing import Callable, Optional

from .errors import InsufficientPrivilegesError
from .logger import get_logger
from .platform_utils import PlatformUtils

logger = get_logger(__name__)


def check_permissions(escalation_command: str = 'sudo',
                      which: Callable[[str], Optional[str]] = shutil.which,
                      geteuid: Callable[[], int] = os.geteuid,
                      runner: Optional[Callable] = None) -> Optional[str]:
    """
    Verify the current user is root or can use the escalation command.

    Returns:
        None when running as root, otherwise the escalation prefix to use

    Raises:
        InsufficientPrivilegesError: neither root nor a usable escalation grant
    """
    if geteuid() == 0:
        return None

    if not which(escalation_command):
        raise InsufficientPrivilegesError(
            f"Error: This script must be run as root or with {escalation_command}. Exiting."
        )

    runner = runner or PlatformUtils.run_command
    success, _, stderr = runner([escalation_command, '-l'], timeout=60)
    if not success:
        logger.debug(f"{escalation_command} -l failed: {stderr.strip()}")
        raise InsufficientPrivilegesError(
            f"Error: User does not have {escalation_command} permissions. Exiting."
        )

    return escalation_command
