"""Allow ``python -m sshhooks``."""

from .cli import sshh_main

sshh_main()
