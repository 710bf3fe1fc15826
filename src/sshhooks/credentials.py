"""Stored passwords for ``sshpass -e``.

Storage: <base>/sshpass/<target>, one plain file per target.
The whole file is the password, byte for byte (a trailing newline is kept).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import Settings

CRED_DIR_NAME = "sshpass"


def credential_path(target: str, settings: Settings) -> Path:
    # String join: an absolute target must not replace the base directory.
    return Path(f"{settings.base_dir / CRED_DIR_NAME}/{target}")


def resolve_credential(
    target: str, settings: Settings, logger: logging.Logger
) -> Optional[bytes]:
    """Return the stored password for ``target``, or None.

    A file that exists but cannot be read, or holds a NUL byte, is reported
    as a warning and treated as absent, so ssh still runs and can prompt on
    its own.
    """
    path = credential_path(target, settings)
    if not path.is_file():
        logger.debug("no stored password for %s (%s)", target, path)
        return None

    try:
        secret = path.read_bytes()
    except OSError as exc:
        logger.warning("cannot read stored password %s: %s", path, exc)
        return None

    # Environment values cannot carry NUL.
    if b"\0" in secret:
        logger.warning("stored password %s contains a NUL byte, ignoring it", path)
        return None

    logger.info("using stored password for %s", target)
    return secret
