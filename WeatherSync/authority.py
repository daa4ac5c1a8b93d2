"""Decides whether this instance may mutate the shared weather record."""
import logging
import os
from typing import Callable


GM_ROLES = ("gm", "authoritative", "producer")


class UnauthorizedMutationError(Exception):
    """Raised when a non-authoritative instance attempts to write shared state."""
    pass


class AuthorityGate:
    """
    Answers "is this instance the authoritative producer?".

    The role source is asked on every call. Roles can change during the
    lifetime of an instance, so the answer is never cached.
    """

    def __init__(self, role_source: Callable[[], bool]):
        """
        Args:
            role_source: Zero-argument callable returning True for the authoritative instance
        """
        self._role_source = role_source

    def is_authoritative(self) -> bool:
        return bool(self._role_source())

    def require_authority(self, action: str) -> None:
        """
        Raise unless this instance is authoritative.

        Args:
            action: Short description of the attempted mutation, for the error message
        """
        if not self.is_authoritative():
            logging.warning(f"Rejected {action}: instance is not authoritative")
            raise UnauthorizedMutationError(f"Only the authoritative instance may {action}")


def fixed_role(authoritative: bool) -> Callable[[], bool]:
    """Role source that always gives the same answer."""
    return lambda: authoritative


def environment_role(var: str = "WEATHER_ROLE") -> Callable[[], bool]:
    """Role source that re-reads an environment variable on every call."""
    def _role() -> bool:
        return os.getenv(var, "observer").strip().lower() in GM_ROLES
    return _role
