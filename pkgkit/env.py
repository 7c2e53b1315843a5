"""
Environment Management Module for PkgKit

Uses python-dotenv for environment variable management.

Usage:
    from pkgkit.env import env

    print(env.list_file)
    print(env.dry_run)
    print(env.log_level)
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Find PkgKit root and load main .env file
current_file = Path(__file__).resolve()
pkgkit_root = current_file.parent.parent
env_file = pkgkit_root / 'data' / '.env'

# Load environment variables
if env_file.exists():
    load_dotenv(env_file)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _resolve(path_value: str) -> Path:
    """Resolve relative paths against the PkgKit root, not the caller's cwd"""
    path = Path(path_value).expanduser()
    if not path.is_absolute():
        path = pkgkit_root / path
    return path


class EnvConfig:
    """Environment configuration object"""

    @property
    def list_file(self) -> Path:
        return _resolve(os.getenv('PKGKIT_LIST_FILE', 'pkglist'))

    @property
    def dry_run(self) -> bool:
        """Install commands are only printed unless this is switched off"""
        return _as_bool(os.getenv('PKGKIT_INSTALL_DRY_RUN', 'true'))

    @property
    def escalation_command(self) -> str:
        return os.getenv('PKGKIT_ESCALATION_COMMAND', 'sudo')

    @property
    def command_timeout(self) -> int:
        return int(os.getenv('PKGKIT_COMMAND_TIMEOUT', '300'))

    @property
    def logs_dir(self) -> str:
        return str(_resolve(os.getenv('PKGKIT_PATHS_LOGS_DIR', 'logs')))

    @property
    def log_level(self) -> str:
        return os.getenv('PKGKIT_LOGGING_CONSOLE_LEVEL', 'INFO')

    @property
    def log_file_enabled(self) -> bool:
        return _as_bool(os.getenv('PKGKIT_LOGGING_FILE_ENABLED', 'false'))

    @property
    def log_file_level(self) -> str:
        return os.getenv('PKGKIT_LOGGING_FILE_LEVEL', 'DEBUG')

    @property
    def log_simple_format(self) -> bool:
        return _as_bool(os.getenv('PKGKIT_LOGGING_CONSOLE_SIMPLE_FORMAT', 'true'))

    @property
    def log_max_files(self) -> int:
        return int(os.getenv('PKGKIT_LOGGING_MAX_FILES', '5'))

    @property
    def log_max_size(self) -> str:
        return os.getenv('PKGKIT_LOGGING_MAX_SIZE', '10MB')


# Global env object
env = EnvConfig()
