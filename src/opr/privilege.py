from __future__ import annotations

import os
from typing import Callable, Optional

import typer

from .errors import PrivilegeDeclined
from .logger import Echo

IdentityProvider = Callable[[], int]
Prompt = Callable[[str], str]

_YES = {"yes", "y"}


def effective_uid() -> int:
    return os.geteuid()


def check_privilege(
    identity: Optional[IdentityProvider] = None,
    prompt: Prompt = typer.prompt,
    echo: Echo = typer.echo,
    assume_yes: bool = False,
) -> bool:
    """
    Return True when running elevated. Otherwise ask the operator to confirm;
    raise PrivilegeDeclined unless they answer yes/y.
    """
    identity = identity or effective_uid
    if identity() == 0:
        return True
    echo("Please run as root or with sudo.")
    if assume_yes:
        echo("Continuing without elevated privileges (--yes).")
        return False
    answer = prompt("Continue anyway? (yes/no)").strip().lower()
    if answer not in _YES:
        echo("Aborting.")
        raise PrivilegeDeclined("operator declined to continue without root")
    return False
