"""
SFTP module for talking to the remote artifact store.

This module provides:
- Credentials: Username/password parsed from a URI user-info segment
- open_sftp_channel: Context-managed session + channel for one operation
- check_connection: Quick connection test utility
"""

from sftp_artifacts.sftp.credentials import Credentials
from sftp_artifacts.sftp.session import (
    check_connection,
    open_sftp_channel,
    resolve_credentials,
    with_connection,
)

__all__ = [
    "Credentials",
    "check_connection",
    "open_sftp_channel",
    "resolve_credentials",
    "with_connection",
]
