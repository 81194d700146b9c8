"""Reading files from DHCP servers over SSH."""

import logging
from pathlib import Path
from typing import Optional

import paramiko

logger = logging.getLogger(__name__)


def _connect(
    host: str,
    user: str,
    port: int,
    key_path: Optional[str],
    connect_timeout: int,
) -> paramiko.SSHClient:
    client = paramiko.SSHClient()
    client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    connect_kwargs: dict = {
        "hostname": host,
        "port": port,
        "username": user,
        "timeout": connect_timeout,
        "allow_agent": True,
        "look_for_keys": True,
    }
    if key_path:
        connect_kwargs["key_filename"] = str(Path(key_path).expanduser())

    logger.debug("SSH connect %s@%s:%d", user, host, port)
    try:
        client.connect(**connect_kwargs)
    except Exception:
        client.close()
        raise
    return client


def read_remote_file(
    host: str,
    path: str,
    user: str = "root",
    port: int = 22,
    key_path: Optional[str] = None,
    connect_timeout: int = 30,
) -> str:
    """
    Fetch a text file from a remote host via SFTP.

    Args:
        host: Hostname or IP address
        path: Absolute path of the file on the remote host
        user: SSH user (default: root)
        port: SSH port (default: 22)
        key_path: Path to SSH private key (uses agent/default keys if None)
        connect_timeout: Connection timeout in seconds (default: 30)

    Returns:
        File contents decoded as UTF-8

    Raises:
        paramiko.SSHException: on SSH protocol or authentication failure
        OSError: if the host is unreachable or the file cannot be read
    """
    client = _connect(host, user, port, key_path, connect_timeout)
    try:
        with client.open_sftp() as sftp, sftp.open(path, "r") as f:
            data = f.read()
    finally:
        client.close()
    logger.debug("Read %d bytes from %s:%s", len(data), host, path)
    return data.decode("utf-8", errors="replace")
