"""
Command line token handling

Flags are repeatable and order-sensitive: every recognized flag runs its
operation at the point it appears. The skip-confirmation flag (-a/--all)
only takes effect when it is the token directly after -i/--install.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .errors import UnknownOptionError


class Operation(Enum):
    COUNT = 'count'
    GENERATE = 'generate'
    INSTALL = 'install'
    HELP = 'help'
    FILE = 'file'


INSTALL_FLAGS = ('-i', '--install')
ALL_FLAGS = ('-a', '--all')

FLAG_OPERATIONS = {
    '-c': Operation.COUNT,
    '--count': Operation.COUNT,
    '-g': Operation.GENERATE,
    '--generate': Operation.GENERATE,
    '-i': Operation.INSTALL,
    '--install': Operation.INSTALL,
    '-h': Operation.HELP,
    '--help': Operation.HELP,
    '-f': Operation.FILE,
    '--file': Operation.FILE,
}


@dataclass(frozen=True)
class Step:
    """One operation and the token that requested it"""

    operation: Optional[Operation]
    token: str


@dataclass(frozen=True)
class InvocationOptions:
    tokens: Tuple[str, ...]
    skip_confirm: bool
    # Recognized operations ahead of the first unknown token
    operations: Tuple[Operation, ...] = ()

    @property
    def show_help_first(self) -> bool:
        return not self.tokens


def check_skip_confirm(tokens: Sequence[str]) -> bool:
    """
    Pre-scan: skip confirmation iff the last -a/--all sits exactly one
    position after the last -i/--install.
    """
    install_pos = None
    all_pos = None

    for position, token in enumerate(tokens):
        if token in INSTALL_FLAGS:
            install_pos = position
        elif token in ALL_FLAGS:
            all_pos = position

    if install_pos is None or all_pos is None:
        return False
    return all_pos == install_pos + 1


def iter_steps(tokens: Sequence[str]):
    """
    Yield a Step per token, left to right.

    -a/--all yields a Step without operation. -f/--file is accepted on its
    own; a token after it is walked like any other.

    Raises:
        UnknownOptionError: when the walk reaches an unrecognized token
    """
    for token in tokens:
        if token in ALL_FLAGS:
            yield Step(None, token)
        elif token in FLAG_OPERATIONS:
            yield Step(FLAG_OPERATIONS[token], token)
        else:
            raise UnknownOptionError(token)


def requested_operations(tokens: Sequence[str]) -> Tuple[Operation, ...]:
    """Operations named before the first unrecognized token, in order"""
    ops = []
    for token in tokens:
        if token in ALL_FLAGS:
            continue
        if token not in FLAG_OPERATIONS:
            break
        ops.append(FLAG_OPERATIONS[token])
    return tuple(ops)


def parse_tokens(tokens: Sequence[str]) -> InvocationOptions:
    return InvocationOptions(
        tokens=tuple(tokens),
        skip_confirm=check_skip_confirm(tokens),
        operations=requested_operations(tokens),
    )

