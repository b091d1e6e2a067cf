"""
Exceptions raised by the SFTP artifact repository.

Every error raised by this package derives from SFTPError, so callers
can catch the whole family at once or a single operation's failure.
"""


class SFTPError(Exception):
    """Raised when SFTP operations fail."""
    pass


class InvalidCredentialsError(SFTPError, ValueError):
    """Raised when the URI user-info cannot be turned into credentials."""
    pass


class SFTPConnectionError(SFTPError):
    """Raised when the SSH session or the SFTP channel cannot be opened."""
    pass


class UploadError(SFTPError):
    """Raised when a file cannot be written to the remote store."""
    pass


class RemoteDirectoryMissingError(UploadError):
    """Raised when a remote parent directory is absent and cannot be created."""
    pass


class ListError(SFTPError):
    """Raised when a remote directory cannot be listed."""
    pass


class DownloadError(SFTPError):
    """Raised when a remote file or directory cannot be retrieved."""
    pass


class LocalIOError(SFTPError):
    """Raised when a local file or temporary location cannot be used."""
    pass
