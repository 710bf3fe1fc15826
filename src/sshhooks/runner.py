"""Compose and run the forwarded ssh command.

The command line is the client name, optionally preceded by ``sshpass -e``,
followed by the user's arguments joined with single spaces.  Arguments are
passed through unescaped, exactly as the shell received them.  The stored
password reaches sshpass through SSHPASS in the child environment only; the
parent's os.environ is never touched.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .config import Settings

# sshpass flag: take the password from the SSHPASS environment variable
PASS_FROM_ENV_FLAG = "-e"


@dataclass
class Command:
    """A composed invocation, ready to hand to the shell."""

    prefix: List[str] = field(default_factory=list)
    args: List[str] = field(default_factory=list)
    env_extra: Dict[str, str] = field(default_factory=dict)

    @property
    def command_line(self) -> str:
        return " ".join(self.prefix + self.args)


def compose_command(
    args: List[str], settings: Settings, secret: Optional[bytes] = None
) -> Command:
    """Build the command for ``args``.

    Args:
        args: The user's arguments, forwarded as-is
        settings: Supplies the client, helper and variable names
        secret: Stored password; switches the prefix to ``sshpass -e ssh``

    Returns:
        Command whose ``args`` equal ``args`` in content and order
    """
    if secret is None:
        return Command(prefix=[settings.client], args=list(args))

    return Command(
        prefix=[settings.pass_helper, PASS_FROM_ENV_FLAG, settings.client],
        args=list(args),
        # fsdecode/fsencode round-trips arbitrary bytes via surrogateescape
        env_extra={settings.pass_env: os.fsdecode(secret)},
    )


def run_command(
    command: Command,
    logger: logging.Logger,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Execute a composed command through the shell and wait for it.

    Args:
        command: Composed invocation
        logger: Diagnostic logger
        environ: Base environment for the child (default: os.environ);
            ``command.env_extra`` is layered on top of a copy

    Returns:
        Exit code from the child process (127 if the shell could not start)
    """
    env = dict(os.environ if environ is None else environ)
    env.update(command.env_extra)

    # Never log env_extra: it holds the password.
    logger.debug("exec: %s", command.command_line)
    try:
        result = subprocess.run(command.command_line, shell=True, env=env)
    except OSError as exc:
        logger.error("cannot run %s: %s", command.prefix[0], exc)
        return 127
    logger.debug("%s exited with %d", command.prefix[0], result.returncode)
    return result.returncode
