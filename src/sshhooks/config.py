"""Paths and binary names, resolved from the environment.

Layout (under ``$HOME/.ssh`` unless SSHH_BASE_DIR is set):
    pre.d/<target>     executable run before ssh
    post.d/<target>    executable run after ssh
    sshpass/<target>   password handed to ``sshpass -e``
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

BASE_DIR_NAME = ".ssh"
DEFAULT_CLIENT = "ssh"
DEFAULT_PASS_HELPER = "sshpass"
PASS_ENV = "SSHPASS"


class ConfigError(Exception):
    """Raised when the environment does not allow building any path."""


@dataclass(frozen=True)
class Settings:
    base_dir: Path
    client: str = DEFAULT_CLIENT
    pass_helper: str = DEFAULT_PASS_HELPER
    pass_env: str = PASS_ENV


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Variables:
    1. HOME              required, root of the default base directory
    2. SSHH_BASE_DIR     replaces $HOME/.ssh
    3. SSHH_CLIENT       remote-login client (default: ssh)
    4. SSHH_PASS_HELPER  password helper (default: sshpass)

    Raises ConfigError if HOME is unset or empty.
    """
    if environ is None:
        environ = os.environ

    home = environ.get("HOME", "")
    if not home:
        raise ConfigError(
            "HOME is not set; cannot locate hooks or stored passwords."
        )

    base_env = environ.get("SSHH_BASE_DIR")
    if base_env:
        base_dir = Path(base_env).expanduser()
    else:
        base_dir = Path(home) / BASE_DIR_NAME

    return Settings(
        base_dir=base_dir,
        client=environ.get("SSHH_CLIENT") or DEFAULT_CLIENT,
        pass_helper=environ.get("SSHH_PASS_HELPER") or DEFAULT_PASS_HELPER,
    )
