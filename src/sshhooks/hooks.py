"""Per-target lifecycle hooks.

``<base>/pre.d/<target>`` runs before ssh, ``<base>/post.d/<target>`` after.
The target is used as a literal path segment: a target like ``../x`` resolves
outside the hook directory.  Hooks are run to completion and their exit
status is ignored.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .config import Settings

PRE = "pre"
POST = "post"


@dataclass
class HookOutcome:
    phase: str
    target: str
    path: Path
    ran: bool = False


def hook_path(phase: str, target: str, settings: Settings) -> Path:
    # String join: an absolute target must not replace the base directory.
    return Path(f"{settings.base_dir / (phase + '.d')}/{target}")


def run_hook(
    phase: str,
    target: str,
    settings: Settings,
    logger: logging.Logger,
    environ: Optional[Mapping[str, str]] = None,
) -> HookOutcome:
    """Run the hook for ``phase`` and ``target`` if one is installed.

    Blocks until the hook exits; there is no timeout.  The hook inherits
    ``environ`` (default: os.environ).

    Returns:
        HookOutcome with ran=True only if the hook was launched
    """
    path = hook_path(phase, target, settings)
    outcome = HookOutcome(phase=phase, target=target, path=path)

    if not path.exists():
        logger.debug("no %s hook for %s (%s)", phase, target, path)
        return outcome

    if not path.is_file() or not os.access(path, os.X_OK):
        logger.warning("%s hook %s is not an executable file, skipping", phase, path)
        return outcome

    logger.info("running %s hook %s", phase, path)
    env = None if environ is None else dict(environ)
    try:
        result = subprocess.run([str(path)], env=env)
    except OSError as exc:
        logger.warning("cannot run %s hook %s: %s", phase, path, exc)
        return outcome

    outcome.ran = True
    logger.debug("%s hook %s exited with %d", phase, path, result.returncode)
    return outcome
