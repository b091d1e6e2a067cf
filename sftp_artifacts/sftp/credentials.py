"""
Credentials carried in the user-info part of an SFTP URI.

    sftp://alice:s3cr:et@host:2222/data/artifacts
           ^^^^^^^^^^^^^
           username "alice", password "s3cr:et"
"""

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import unquote

from sftp_artifacts.exceptions import InvalidCredentialsError

USER_INFO_SEPARATOR = ":"


@dataclass(frozen=True)
class Credentials:
    """
    Login for an SFTP session.

    Attributes:
        username: Login name sent to the server
        password: Optional password; never shown in repr()
    """
    username: str
    password: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_user_info(cls, user_info: Optional[str]) -> "Credentials":
        """
        Parse a raw ``user`` or ``user:pass`` string.

        The username ends at the first separator, so the password itself
        may contain ``:``. Both parts are percent-decoded after splitting.

        Args:
            user_info: User-info segment of a URI, still percent-encoded

        Returns:
            Parsed Credentials

        Raises:
            InvalidCredentialsError: If user_info is empty or absent
        """
        if not user_info:
            raise InvalidCredentialsError(
                "URI user-info is empty. Expected 'username' or 'username:password'."
            )

        username, separator, password = user_info.partition(USER_INFO_SEPARATOR)
        return cls(
            username=unquote(username),
            password=unquote(password) if separator else None,
        )

    @property
    def has_password(self) -> bool:
        return self.password is not None
