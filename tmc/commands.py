"""
Job-control commands: add, ls, remove and save.

Each command is a single request/response against the daemon. The first
failure aborts the command; lines already printed stay printed.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .base_client import BaseJobClient
from .config import Config, ConnectionProfile, SAVE_NAME, save_config
from .exceptions import CommandError, TmcError
from .formatting import format_job
from .logger import logger
from .utils import is_remote_locator, parse_ids


@dataclass
class AppContext:
    """Everything a command needs for one invocation."""
    profile: ConnectionProfile
    client: Optional[BaseJobClient] = None
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)
    config_path: Path = field(default_factory=lambda: Path(Config.CONFIG_DIR) / SAVE_NAME)

    def echo(self, line: str):
        print(line, file=self.out)


def add(ctx: AppContext, items: Sequence[str], detail: bool = False, delete: bool = False):
    """Add each URL, magnet link or .torrent file, printing the new job ID."""
    for item in items:
        try:
            if is_remote_locator(item):
                job = ctx.client.add_from_remote(item)
            else:
                job = ctx.client.add_from_local_file(item)
        except TmcError as e:
            raise CommandError("add", item, e) from e

        if delete and not is_remote_locator(item):
            try:
                os.remove(item)
            except OSError as e:
                raise CommandError("remove torrent file", item, e) from e
            logger.debug(f"Deleted {item}")

        if detail:
            ctx.echo(format_job(job))
        else:
            ctx.echo("-" if job.id is None else str(job.id))


def ls(ctx: AppContext, args: Sequence[str] = ()):
    ids = parse_ids(args)
    for job in ctx.client.list_jobs(ids):
        ctx.echo(format_job(job))


def select_done(ctx: AppContext) -> List[int]:
    """IDs of every job that is stopped with nothing left to download."""
    return [job.id for job in ctx.client.list_jobs() if job.is_done and job.id is not None]


def remove(ctx: AppContext, args: Sequence[str] = (), delete: bool = False):
    """
    Remove the given jobs, or every finished and stopped job when none are given.

    Nothing is sent to the daemon when there is nothing to remove.
    """
    ids = parse_ids(args)
    if not ids:
        ids = select_done(ctx)
        logger.debug(f"Selected finished jobs {ids}")

    if ids:
        ctx.client.remove_jobs(ids, delete_data=delete)

    for job_id in ids:
        ctx.echo(str(job_id))


def save(ctx: AppContext) -> Path:
    """Write the effective configuration so later runs pick it up without flags."""
    print(f"Save configuration to {ctx.config_path}", file=ctx.err)
    return save_config(ctx.profile, ctx.config_path)
