"""
Transmission RPC adapter.

Wraps transmission_rpc.Client behind BaseJobClient so the commands deal only
in JobSummary values and CLI errors.
"""

from typing import List, Optional, Sequence

from transmission_rpc import Client as TransmissionRPCClient
from transmission_rpc import TransmissionError
from transmission_rpc.torrent import Torrent as TransmissionTorrent

from .base_client import BaseJobClient
from .config import ConnectionProfile
from .exceptions import CollaboratorError, ConfigError
from .logger import logger
from .models import RPC_FIELDS, JobSummary


TRANSMISSION_PORT = 9091
TRANSMISSION_PATH = "/transmission/rpc"


def _summary(torrent: TransmissionTorrent) -> JobSummary:
    return JobSummary.from_fields(torrent.fields)


class TransmissionJobClient(BaseJobClient):
    def __init__(self, client: TransmissionRPCClient):
        self.client = client

    @classmethod
    def from_profile(cls, profile: ConnectionProfile) -> "TransmissionJobClient":
        """
        Connect to the daemon described by the profile.

        transmission-rpc opens the session while constructing the client, so
        bad credentials or an unreachable host fail here.

        Raises:
            ConfigError: If the client could not be constructed
        """
        protocol = "https" if profile.https else "http"
        port = profile.port or TRANSMISSION_PORT
        path = profile.path or TRANSMISSION_PATH
        logger.debug(f"Connecting to {protocol}://{profile.host}:{port}{path}")
        try:
            client = TransmissionRPCClient(
                protocol=protocol,
                host=profile.host,
                port=port,
                path=path,
                username=profile.user or None,
                password=profile.password or None,
            )
        except TransmissionError as e:
            raise ConfigError(f"Failed to connect to Transmission at {profile.host}:{port}: {e}") from e
        return cls(client)

    def add_from_remote(self, locator: str) -> JobSummary:
        try:
            torrent = self.client.add_torrent(locator)
        except TransmissionError as e:
            raise CollaboratorError("torrent-add", e) from e
        logger.debug(f"Added {locator} as job {torrent.id}")
        return _summary(torrent)

    def add_from_local_file(self, path: str) -> JobSummary:
        try:
            with open(path, "rb") as f:
                torrent_data = f.read()
            torrent = self.client.add_torrent(torrent_data)
        except (OSError, TransmissionError) as e:
            raise CollaboratorError("torrent-add", e) from e
        logger.debug(f"Added {path} as job {torrent.id}")
        return _summary(torrent)

    def list_jobs(self, ids: Optional[Sequence[int]] = None) -> List[JobSummary]:
        try:
            torrents = self.client.get_torrents(ids=list(ids) if ids else None,
                                                arguments=RPC_FIELDS)
        except TransmissionError as e:
            raise CollaboratorError("torrent-get", e) from e
        return [_summary(torrent) for torrent in torrents]

    def remove_jobs(self, ids: Sequence[int], delete_data: bool = False) -> None:
        try:
            self.client.remove_torrent(list(ids), delete_data=delete_data)
        except TransmissionError as e:
            raise CollaboratorError("torrent-remove", e) from e
        logger.debug(f"Removed jobs {list(ids)} (delete_data={delete_data})")
