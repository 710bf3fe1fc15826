"""Find the connection target in an ssh-style argument list.

Follows the option grammar of OpenSSH's ``ssh`` client:
- Flags that take a value:  -B -b -c -D -E -e -F -I -i -J -L -l -m -O -o -p
                            -Q -R -S -W -w
- Verbosity flag:           -v  (repeatable, also inside clusters: -vvv)
- Everything else after a dash is a no-argument flag.

The first token that is neither a flag cluster nor the value of a flag is the
target.  Later positional tokens (the remote command) are left alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

# Letters whose flag consumes the following token as its value.
VALUE_FLAGS = frozenset("BbcDEeFIiJLlmOopQRSWw")

VERBOSE_FLAG = "v"


@dataclass
class ParsedInvocation:
    """Result of classifying sshh arguments."""

    target: Optional[str] = None
    verbosity: int = 0


def is_flag_cluster(token: str) -> bool:
    """Return True for a token like ``-v`` or ``-vvp`` (a dash plus letters)."""
    return token.startswith("-") and len(token) > 1


def parse_args(args: List[str]) -> ParsedInvocation:
    """Classify ssh arguments, returning the target and the -v count.

    Every character of a flag cluster is inspected, so ``-vp 22 host`` counts
    one ``-v`` and skips ``22`` as the port.  A value letter anywhere in the
    cluster means the next token is its value, even when the cluster already
    carries one (``-p2222 host`` swallows ``host``).

    Args:
        args: Raw arguments (excluding the program name)

    Returns:
        ParsedInvocation with target None when every token was a flag or a
        flag value.
    """
    result = ParsedInvocation()
    expecting_value = False

    for arg in args:
        if not arg:
            continue

        if expecting_value:
            # previous cluster asked for a value
            expecting_value = False
            continue

        if is_flag_cluster(arg):
            for letter in arg[1:]:
                if letter in VALUE_FLAGS:
                    expecting_value = True
                elif letter == VERBOSE_FLAG:
                    result.verbosity += 1
            continue

        if result.target is None:
            result.target = arg

    return result
