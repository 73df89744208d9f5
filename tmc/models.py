"""
Read-only views of Transmission torrents ("jobs").

JobSummary mirrors the subset of torrent-get fields the CLI displays. Every
field is optional because the daemon only returns what was asked for.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional


class JobStatus(IntEnum):
    STOPPED = 0
    CHECK_WAIT = 1
    CHECKING = 2
    DOWNLOAD_WAIT = 3
    DOWNLOADING = 4
    SEED_WAIT = 5
    SEEDING = 6


# torrent-get field names, in the order JobSummary declares them
RPC_FIELDS = [
    "id",
    "name",
    "status",
    "percentDone",
    "haveValid",
    "haveUnchecked",
    "desiredAvailable",
    "leftUntilDone",
]


def _status(value: Any) -> Optional[JobStatus]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return JobStatus(int(value))
    except (TypeError, ValueError):
        return None


def _int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class JobSummary:
    id: Optional[int] = None
    name: Optional[str] = None
    status: Optional[JobStatus] = None
    percent_done: Optional[float] = None
    have_valid: Optional[int] = None
    have_unchecked: Optional[int] = None
    desired_available: Optional[int] = None
    left_until_done: Optional[int] = None

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "JobSummary":
        """Build from a raw torrent-get mapping; unknown status codes become None."""
        percent_done = fields.get("percentDone")
        return cls(
            id=_int(fields.get("id")),
            name=fields.get("name"),
            status=_status(fields.get("status")),
            percent_done=None if percent_done is None else float(percent_done),
            have_valid=_int(fields.get("haveValid")),
            have_unchecked=_int(fields.get("haveUnchecked")),
            desired_available=_int(fields.get("desiredAvailable")),
            left_until_done=_int(fields.get("leftUntilDone")),
        )

    @property
    def is_done(self) -> bool:
        """Stopped with nothing left to download; missing fields count as not done."""
        return self.status == JobStatus.STOPPED and self.left_until_done == 0
