"""sshh: ssh wrapper with per-host hooks and stored passwords.

Usage is exactly ssh's:  sshh [SSH_OPTIONS] host [COMMAND]

For the target host (the first non-option argument):
1. <base>/pre.d/<host>    runs before ssh, if executable
2. <base>/sshpass/<host>  if present, ssh runs under ``sshpass -e``
3. <base>/post.d/<host>   runs after ssh, if executable

<base> is ~/.ssh unless SSHH_BASE_DIR is set.  Each -v passed to ssh also
raises sshh's own diagnostics (progress and warnings, then debug lines).
"""

from __future__ import annotations

import os
import sys
from typing import List, Mapping, Optional

from .config import ConfigError, load_settings
from .credentials import resolve_credential
from .hooks import POST, PRE, run_hook
from .log import make_logger
from .parser import parse_args
from .runner import compose_command, run_command


def main(
    argv: Optional[List[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Run the wrapper pipeline and return the exit status of ssh.

    ``environ`` (default: os.environ) locates the hook and password files
    and is the base environment of every child process.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    if environ is None:
        environ = os.environ

    parsed = parse_args(args)
    logger = make_logger(parsed.verbosity)

    try:
        settings = load_settings(environ)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    # No target (e.g. `sshh -V`): forward without hooks or password.
    if parsed.target is None:
        logger.debug("no target found, forwarding arguments unchanged")
        return run_command(compose_command(args, settings), logger, environ)

    target = parsed.target
    logger.debug("target: %s", target)

    secret = resolve_credential(target, settings, logger)
    run_hook(PRE, target, settings, logger, environ)

    exit_code = run_command(
        compose_command(args, settings, secret), logger, environ
    )

    run_hook(POST, target, settings, logger, environ)
    return exit_code


def sshh_main() -> None:
    """Main entry point for the `sshh` command."""
    sys.exit(main())
