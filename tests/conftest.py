import io

import pytest

from tmc.base_client import BaseJobClient
from tmc.commands import AppContext
from tmc.config import ConnectionProfile
from tmc.exceptions import CollaboratorError
from tmc.models import JobStatus, JobSummary


class FakeJobClient(BaseJobClient):
    """In-memory daemon recording every call the commands make."""

    def __init__(self, jobs=None, fail_on=()):
        self.jobs = list(jobs or [])
        self.fail_on = set(fail_on)
        self.calls = []
        self.next_id = 100

    def _add(self, operation, item):
        self.calls.append((operation, item))
        if item in self.fail_on:
            raise CollaboratorError("torrent-add", RuntimeError("duplicate torrent"))
        job = JobSummary(id=self.next_id, name=item)
        self.next_id += 1
        self.jobs.append(job)
        return job

    def add_from_remote(self, locator):
        return self._add("add_from_remote", locator)

    def add_from_local_file(self, path):
        try:
            with open(path, "rb"):
                pass
        except OSError as e:
            raise CollaboratorError("torrent-add", e) from e
        return self._add("add_from_local_file", path)

    def list_jobs(self, ids=None):
        self.calls.append(("list_jobs", list(ids or [])))
        if not ids:
            return list(self.jobs)
        return [job for job in self.jobs if job.id in ids]

    def remove_jobs(self, ids, delete_data=False):
        self.calls.append(("remove_jobs", list(ids), delete_data))
        self.jobs = [job for job in self.jobs if job.id not in ids]


@pytest.fixture
def sample_jobs():
    return [
        JobSummary(id=1, name="finished.iso", status=JobStatus.STOPPED, percent_done=1.0,
                   have_valid=100, have_unchecked=0, desired_available=0, left_until_done=0),
        JobSummary(id=2, name="partial.iso", status=JobStatus.STOPPED, percent_done=0.75,
                   have_valid=95, have_unchecked=0, desired_available=0, left_until_done=5),
        JobSummary(id=3, name="running.iso", status=JobStatus.DOWNLOADING, percent_done=0.5,
                   have_valid=50, have_unchecked=0, desired_available=0, left_until_done=0),
        JobSummary(id=4, name="unknown.iso"),
    ]


@pytest.fixture
def fake_client(sample_jobs):
    return FakeJobClient(jobs=sample_jobs)


@pytest.fixture
def ctx(fake_client, tmp_path):
    return AppContext(
        profile=ConnectionProfile(),
        client=fake_client,
        out=io.StringIO(),
        err=io.StringIO(),
        config_path=tmp_path / ".tmc" / "config.yml",
    )
