"""
Scoped SSH session and SFTP channel management.

Every repository operation opens its own paramiko Transport (the SSH
session) and SFTPClient (the file-transfer channel), uses them, and
closes both on the way out, whether the operation succeeded or not:

    with open_sftp_channel(config) as sftp:
        sftp.listdir_attr("/data/artifacts")

Sessions are never pooled or shared between calls.
"""

import logging
import os
from contextlib import contextmanager
from typing import Callable, Generator, Optional, TypeVar

import paramiko

from sftp_artifacts.config.models import DEFAULT_SFTP_PORT, RepositoryConfig
from sftp_artifacts.exceptions import SFTPConnectionError, SFTPError
from sftp_artifacts.sftp.credentials import Credentials

logger = logging.getLogger(__name__)

DEFAULT_KNOWN_HOSTS = "~/.ssh/known_hosts"

T = TypeVar("T")


def resolve_credentials(config: RepositoryConfig) -> Credentials:
    """
    Determine the login for a repository.

    An explicit ``username`` in the config wins over the URI user-info;
    an explicit ``password`` replaces the URI password.

    Raises:
        InvalidCredentialsError: If neither the config nor the URI names a user
    """
    if config.username:
        return Credentials(username=config.username, password=config.password)

    credentials = Credentials.from_user_info(config.user_info)
    if config.password is not None:
        return Credentials(username=credentials.username, password=config.password)
    return credentials


def _load_private_key(key_path: str) -> paramiko.PKey:
    """
    Load private key from file, trying different key types.

    Raises:
        SFTPConnectionError: If key cannot be loaded
    """
    key_path = os.path.expanduser(key_path)
    if not os.path.exists(key_path):
        raise SFTPConnectionError(f"SSH key file not found: {key_path}")

    key_classes = [
        paramiko.RSAKey,
        paramiko.Ed25519Key,
        paramiko.ECDSAKey,
    ]

    last_error = None
    for key_class in key_classes:
        try:
            return key_class.from_private_key_file(key_path)
        except paramiko.SSHException as e:
            last_error = e
            continue

    raise SFTPConnectionError(f"Could not load SSH key {key_path}: {last_error}")


def _expected_host_key(config: RepositoryConfig) -> paramiko.PKey:
    """
    Look up the server's key in known_hosts.

    Non-standard ports are stored as ``[host]:port`` entries.

    Raises:
        SFTPConnectionError: If known_hosts cannot be read or has no entry
    """
    known_hosts = os.path.expanduser(config.known_hosts_path or DEFAULT_KNOWN_HOSTS)
    host_keys = paramiko.HostKeys()
    try:
        host_keys.load(known_hosts)
    except IOError as e:
        raise SFTPConnectionError(f"Cannot read known_hosts file {known_hosts}: {e}") from e

    if config.port == DEFAULT_SFTP_PORT:
        lookup_name = config.host
    else:
        lookup_name = f"[{config.host}]:{config.port}"

    entry = host_keys.lookup(lookup_name)
    if not entry:
        raise SFTPConnectionError(
            f"Host key verification is enabled but {lookup_name} "
            f"has no entry in {known_hosts}"
        )
    return next(iter(entry.values()))


def _authenticate(
    transport: paramiko.Transport,
    config: RepositoryConfig,
    credentials: Credentials,
) -> None:
    """Run the SSH handshake and log in with a key, a password, or 'none'."""
    if config.verify_host_key:
        hostkey = _expected_host_key(config)
    else:
        hostkey = None
        logger.warning(
            f"Host key verification disabled for {config.host}:{config.port}; "
            "any server key is accepted"
        )

    if config.key_path:
        pkey = _load_private_key(config.key_path)
        transport.connect(hostkey=hostkey, username=credentials.username, pkey=pkey)
        logger.debug(f"Authenticated with SSH key: {config.key_path}")

    elif credentials.has_password:
        transport.connect(
            hostkey=hostkey,
            username=credentials.username,
            password=credentials.password,
        )
        logger.debug("Authenticated with password")

    else:
        transport.connect(hostkey=hostkey)
        transport.auth_none(credentials.username)
        logger.debug("Authenticated without credentials")

    if not transport.is_authenticated():
        raise SFTPConnectionError(
            f"Authentication as '{credentials.username}' was not accepted"
        )


def _close_quietly(
    sftp: Optional[paramiko.SFTPClient],
    transport: Optional[paramiko.Transport],
) -> None:
    """Close channel then session; failures are logged, never raised."""
    if sftp is not None:
        try:
            sftp.close()
        except Exception as e:
            logger.warning(
                f"Error closing SFTP channel: {e}. "
                "Ignoring it and closing the SSH session itself."
            )

    if transport is not None:
        try:
            transport.close()
        except Exception as e:
            logger.warning(f"Error closing SSH transport: {e}")

    logger.debug("SFTP connection closed")


@contextmanager
def open_sftp_channel(config: RepositoryConfig) -> Generator[paramiko.SFTPClient, None, None]:
    """
    Context manager for a fresh SSH session and SFTP channel.

    Unlike a pooled connection, this creates a new session for each
    call and closes it when the block exits. Exceptions raised inside
    the block propagate unchanged after cleanup.

    Args:
        config: Repository settings (host, port, credentials, host key policy)

    Yields:
        Connected paramiko SFTPClient

    Raises:
        InvalidCredentialsError: If no username can be determined
        SFTPConnectionError: If the session or channel cannot be established
    """
    credentials = resolve_credentials(config)
    transport: Optional[paramiko.Transport] = None
    sftp: Optional[paramiko.SFTPClient] = None

    try:
        try:
            logger.debug(
                f"Connecting to SFTP: {config.host}:{config.port} "
                f"as '{credentials.username}'"
            )
            transport = paramiko.Transport((config.host, config.port))
            _authenticate(transport, config, credentials)

            sftp = paramiko.SFTPClient.from_transport(transport)
            if sftp is None:
                raise SFTPConnectionError(
                    f"Server {config.host} refused to open an SFTP channel"
                )
            logger.info(f"Connected to SFTP server: {config.host}:{config.port}")

        except SFTPConnectionError as e:
            logger.error(f"SFTP connection to {config.host}:{config.port} failed: {e}")
            raise
        except paramiko.SSHException as e:
            logger.error(f"SSH connection to {config.host}:{config.port} failed: {e}")
            raise SFTPConnectionError(
                f"SSH connection to {config.host}:{config.port} failed: {e}"
            ) from e
        except Exception as e:
            logger.error(f"SFTP connection to {config.host}:{config.port} failed: {e}")
            raise SFTPConnectionError(
                f"SFTP connection to {config.host}:{config.port} failed: {e}"
            ) from e

        yield sftp

    finally:
        _close_quietly(sftp, transport)


def with_connection(config: RepositoryConfig, operation: Callable[[paramiko.SFTPClient], T]) -> T:
    """Run ``operation`` with a freshly opened channel and return its result."""
    with open_sftp_channel(config) as sftp:
        return operation(sftp)


def check_connection(config: RepositoryConfig) -> bool:
    """
    Test SFTP connectivity without transferring files.

    Opens a session and checks the repository base directory exists.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        with open_sftp_channel(config) as sftp:
            sftp.stat(config.base_path)
            logger.info(f"Connection test successful for {config.safe_uri}")
            return True
    except (SFTPError, IOError) as e:
        logger.error(f"Connection test failed: {e}")
        return False
