"""
CLI Module

Command line interface for PkgKit providing:
- Package count for the detected package manager
- Package list generation
- Package list installation (dry-run by default)
"""

import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from .env import EnvConfig, env
from .errors import PkgKitError
from .installer import Installer
from .logger import get_logger, setup_logging
from .options import InvocationOptions, Operation, Step, iter_steps, parse_tokens
from .package_list import write_package_list
from .package_managers import PackageManager, get_package_manager
from .permissions import check_permissions
from .platform_utils import PackageManagerKind, detect_package_manager

logger = get_logger(__name__)

# Click drops '--' from parsed arguments; the walk needs every token
RAW_TOKENS_KEY = 'pkgkit.raw_tokens'

HELP_TEXT = """Usage: pkgkit [OPTIONS]
Options:
  -c, --count       Display the count of installed packages.
  -g, --generate    Generate a text file of all installed packages.
  -i, --install     Install all packages from the generated list.
  -h, --help        Display this help message.

Optional:
  -a, --all         Skip confirmation for installation.
                    (Must directly follow -i, --install; otherwise ignored)
  -f, --file FILE   Not implemented; set PKGKIT_LIST_FILE instead.

Options run in the order given and may be repeated.
Installation is a dry run unless PKGKIT_INSTALL_DRY_RUN=false.

Exit codes:
  0 success                   1 insufficient privileges
  2 unsupported manager       3 package list not found
  4 installation aborted      5 unknown option
  6 package manager command failed

Example:
  pkgkit --count
  pkgkit --generate
  pkgkit --install
  pkgkit --install --all
  pkgkit -c -g -i"""


@dataclass
class RunContext:
    """State shared by the operations of one invocation"""

    kind: PackageManagerKind
    options: InvocationOptions
    settings: EnvConfig


class PkgKitCLI:
    """Command line interface for PkgKit"""

    def __init__(self, settings: Optional[EnvConfig] = None,
                 detector: Optional[Callable[[], PackageManagerKind]] = None,
                 manager_factory: Optional[Callable[..., PackageManager]] = None,
                 permission_check: Optional[Callable[..., Optional[str]]] = None,
                 console: Optional[Console] = None):
        self.console = console or Console()
        self.settings = settings or env
        self.detector = detector or detect_package_manager
        self.manager_factory = manager_factory or get_package_manager
        self.permission_check = permission_check or check_permissions

    def _print(self, message: str, style: Optional[str] = None) -> None:
        """Print message with optional styling"""
        self.console.print(Text(message, style=style or ''))

    def _print_panel(self, content: str, title: str, style: str = "blue") -> None:
        """Print content in a panel"""
        self.console.print(Panel(Text(content), title=title, border_style=style, expand=False))

    def _input(self, prompt: str) -> str:
        """Read one line from the user; the caller decides what it means"""
        return Prompt.ask(Text(prompt.rstrip(': ')), console=self.console)

    def show_help(self) -> None:
        self._print_panel(HELP_TEXT, "PkgKit", "cyan")

    def _manager(self, context: RunContext) -> PackageManager:
        return self.manager_factory(context.kind, timeout=context.settings.command_timeout)

    def count_packages(self, context: RunContext) -> int:
        count = self._manager(context).count()
        self._print(str(count))
        return count

    def generate_package_list(self, context: RunContext) -> None:
        manager = self._manager(context)
        path = write_package_list(context.settings.list_file, manager.list_installed())
        logger.info(f"List of installed packages saved to '{path}'.")

    def install_packages(self, context: RunContext) -> None:
        installer = Installer(
            self._manager(context),
            context.settings.list_file,
            prompt=self._input,
            skip_confirm=context.options.skip_confirm,
            dry_run=context.settings.dry_run,
            escalation_command=context.settings.escalation_command,
            permission_check=self.permission_check,
        )
        installer.run()

    def _run_step(self, step: Step, context: RunContext) -> None:
        if step.operation is Operation.COUNT:
            self.count_packages(context)
        elif step.operation is Operation.GENERATE:
            self.generate_package_list(context)
        elif step.operation is Operation.INSTALL:
            self.install_packages(context)
        elif step.operation is Operation.HELP:
            self.show_help()
        elif step.operation is Operation.FILE:
            logger.warning("Option -f/--file is not implemented; set PKGKIT_LIST_FILE instead.")

    def run(self, tokens: List[str]) -> int:
        """
        Run every operation requested by tokens, in order

        Returns:
            Process exit code
        """
        options = parse_tokens(tokens)
        if options.show_help_first:
            self.show_help()

        try:
            context = RunContext(self.detector(), options, self.settings)
            logger.debug(
                "Package manager: %s, operations: %s, skip confirmation: %s",
                context.kind.label,
                ', '.join(op.value for op in options.operations) or 'none',
                options.skip_confirm,
            )

            for step in iter_steps(options.tokens):
                self._run_step(step, context)
        except PkgKitError as e:
            logger.error(e.message)
            return e.exit_code

        return 0


class RawTokensCommand(click.Command):
    """Command that keeps argv untouched in ctx.meta, including a bare '--'"""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.meta[RAW_TOKENS_KEY] = list(args)
        return super().parse_args(ctx, args)


@click.command(cls=RawTokensCommand,
               context_settings={'ignore_unknown_options': True, 'help_option_names': []})
@click.argument('tokens', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx, tokens):
    """Count, snapshot and reinstall the packages of this host."""
    setup_logging()
    cli = PkgKitCLI()
    try:
        code = cli.run(ctx.meta[RAW_TOKENS_KEY])
    except KeyboardInterrupt:
        cli._print("\nInterrupted", "yellow")
        code = 130
    sys.exit(code)
