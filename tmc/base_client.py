"""
Abstract base class defining the job-control interface the commands use.

TransmissionJobClient implements it over transmission-rpc; tests substitute
an in-memory implementation.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .models import JobSummary


class BaseJobClient(ABC):
    """Abstract base class for the remote daemon the CLI controls."""

    @abstractmethod
    def add_from_remote(self, locator: str) -> JobSummary:
        """
        Ask the daemon to fetch a torrent itself.

        Args:
            locator: HTTP(S) URL to a .torrent file, or a magnet link

        Returns:
            Summary of the new job as reported by the daemon
        """
        pass

    @abstractmethod
    def add_from_local_file(self, path: str) -> JobSummary:
        """
        Upload the contents of a local .torrent file.

        Args:
            path: Path to the .torrent file

        Returns:
            Summary of the new job as reported by the daemon
        """
        pass

    @abstractmethod
    def list_jobs(self, ids: Optional[Sequence[int]] = None) -> List[JobSummary]:
        """
        Fetch job summaries in the daemon's order.

        Args:
            ids: Jobs to fetch; None or empty fetches all of them
        """
        pass

    @abstractmethod
    def remove_jobs(self, ids: Sequence[int], delete_data: bool = False) -> None:
        """
        Remove jobs from the daemon in a single request.

        Args:
            ids: Non-empty list of job IDs
            delete_data: Also delete downloaded data
        """
        pass
