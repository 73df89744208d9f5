"""
tmc - command-line client for a Transmission daemon.

Adds, lists and removes torrents over Transmission RPC, with connection
settings merged from ~/.tmc/config.yaml, TRANSMISSION_* variables and flags.
"""

from .config import Config, ConnectionProfile
from .models import JobStatus, JobSummary

__version__ = "0.1.0"
__all__ = ["Config", "ConnectionProfile", "JobStatus", "JobSummary"]
