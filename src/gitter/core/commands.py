"""Command line construction for git invocations.

Every option value and positional argument is quoted here before it can
reach a process, so this module is the one place where caller-supplied
strings (paths, branch names, URLs) get escaped.

Example:
    ```python
    from gitter.core.commands import build_command

    prepared = build_command("/usr/bin/git", "log", {"-n": "1", "--oneline": None}, ["HEAD"])
    prepared.argv
    # ['/usr/bin/git', '-c', 'color.ui=false', 'log', '-n', '1', '--oneline', 'HEAD']
    prepared.command_line
    # "/usr/bin/git -c \"color.ui\"=false log -n 1 --oneline HEAD"
    ```
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

# Rendered and tokenized forms of the flag that turns off colored output.
COLOR_FLAG = '-c "color.ui"=false'
COLOR_FLAG_ARGV = ("-c", "color.ui=false")

Options = Mapping[str, Optional[str]]


@dataclass(frozen=True)
class PreparedCommand:
    """A git invocation ready to be executed.

    Attributes:
        executable: Path of the git binary.
        command: The git verb (``init``, ``clone``, ``log``...).
        options: Option items as ``(name, value)`` pairs, in caller order.
            A ``None`` value is a flag without a value.
        args: Positional arguments, in caller order.
    """

    executable: str
    command: str
    options: Tuple[Tuple[str, Optional[str]], ...] = ()
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        """Token list handed to the process spawner."""
        tokens = [self.executable, *COLOR_FLAG_ARGV, self.command]
        for name, value in self.options:
            tokens.append(name)
            if value is not None:
                tokens.append(value)
        tokens.extend(self.args)
        return tokens

    @property
    def command_line(self) -> str:
        """Shell rendering of the command with values and args quoted."""
        parts = [self.executable, COLOR_FLAG, self.command]

        if self.options:
            items = []
            for name, value in self.options:
                item = name
                if value is not None:
                    item += " " + shlex.quote(value)
                items.append(item)
            parts.append(" ".join(items))

        if self.args:
            parts.append(" ".join(shlex.quote(arg) for arg in self.args))

        return " ".join(parts)

    def __str__(self) -> str:
        return self.command_line


def build_command(
    executable: str,
    command: str,
    options: Optional[Options] = None,
    args: Optional[Sequence[str]] = None,
) -> PreparedCommand:
    """Build a prepared command from a verb, options and arguments.

    Args:
        executable: Path of the git binary.
        command: Git verb. Not validated.
        options: Ordered mapping of option name to value. ``None`` values
            emit the name alone.
        args: Positional arguments appended after the options.

    Returns:
        PreparedCommand: The prepared command.
    """
    option_items = tuple((str(name), None if value is None else str(value))
                         for name, value in (options or {}).items())
    arg_items = tuple(str(arg) for arg in (args or ()))
    return PreparedCommand(executable, command, option_items, arg_items)


class CommandBuilder:
    """Builds commands for a fixed git executable."""

    def __init__(self, executable: str):
        self.executable = executable

    def build(
        self,
        command: str,
        options: Optional[Options] = None,
        args: Optional[Sequence[str]] = None,
    ) -> PreparedCommand:
        """Build a prepared command for this builder's executable."""
        return build_command(self.executable, command, options, args)
