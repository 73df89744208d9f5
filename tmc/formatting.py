"""
Fixed-width status lines for jobs.

    [ <id> ][ <avail> ][ <progress> ][ <state> ] <name>

e.g. "[   12 ][ OK! ][ 50% ][ >> ] debian-12.6.0-amd64-netinst.iso"
"""

from typing import Optional

from .models import JobStatus, JobSummary


MISSING = "---"
COMPLETE = "OK!"

STATE_TOKENS = {
    JobStatus.STOPPED: "||",
    JobStatus.CHECK_WAIT: ">>",
    JobStatus.CHECKING: ">>",
    JobStatus.DOWNLOAD_WAIT: ">>",
    JobStatus.DOWNLOADING: ">>",
    JobStatus.SEED_WAIT: "<<",
    JobStatus.SEEDING: "<<",
}
UNKNOWN_STATE = "--"


def _percent(value: int) -> str:
    return COMPLETE if value == 100 else f"{value:2d}%"


def format_progress(percent_done: Optional[float]) -> str:
    if percent_done is None:
        return MISSING
    return _percent(int(100 * percent_done))


def format_availability(job: JobSummary) -> str:
    """Share of the torrent that is local or available from peers."""
    counts = (job.have_valid, job.have_unchecked, job.desired_available, job.left_until_done)
    if any(count is None for count in counts):
        return MISSING

    have = job.have_valid + job.have_unchecked
    avail = have + job.desired_available
    total = have + job.left_until_done
    if total == 0:
        return MISSING
    return _percent(100 * avail // total)


def format_state(status: Optional[JobStatus]) -> str:
    return STATE_TOKENS.get(status, UNKNOWN_STATE)


def format_job(job: JobSummary) -> str:
    job_id = "-" if job.id is None else str(job.id)
    name = "-" if job.name is None else job.name
    return "[ {:>4} ][ {} ][ {} ][ {} ] {}".format(
        job_id,
        format_availability(job),
        format_progress(job.percent_done),
        format_state(job.status),
        name,
    )
