"""Module for handling repository authentication."""

from dataclasses import dataclass
import logging
from pathlib import Path

from .exceptions import InputException

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Auth:
    """Authentication credentials."""

    username: str
    password: str

    def __repr__(self) -> str:
        """Return a representation that does not leak the password."""
        return f"Auth(username={self.username!r}, password='***')"


def load_auth(
    username: str | None = None,
    password: str | None = None,
    username_password_file: str | None = None,
) -> Auth | None:
    """Return the username and password for a repository, if any.

    The username_password_file takes precedence over inline values and must
    contain a single `username:password` line.
    """
    if username_password_file:
        path = Path(username_password_file)
        try:
            content = path.read_text().strip()
        except OSError as err:
            raise InputException(
                f"Unable to read username password file {path}: {err}"
            ) from err
        if ":" not in content:
            raise InputException(
                f"Username password file {path} must be formatted as username:password"
            )
        file_username, file_password = content.split(":", 1)
        return Auth(username=file_username, password=file_password)

    if username is None and password is None:
        return None
    if not username or password is None:
        raise InputException("Both username and password must be set")
    _LOGGER.debug("Using basic authentication for user %s", username)
    return Auth(username=username, password=password)
