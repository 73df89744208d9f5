import re
from typing import Iterable, List

from .exceptions import InvalidJobIdError


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_ids(args: Iterable[str]) -> List[int]:
    """
    Convert command arguments to job IDs.

    Args:
        args: Decimal strings, e.g. ["12", "7"]

    Returns:
        The IDs in argument order; an empty list for no arguments

    Raises:
        InvalidJobIdError: For the first argument that is not a signed 64-bit decimal
    """
    ids = []
    for arg in args:
        if not _DECIMAL.fullmatch(arg):
            raise InvalidJobIdError(arg, "not a decimal integer")
        value = int(arg, 10)
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidJobIdError(arg, "value out of range")
        ids.append(value)
    return ids


REMOTE_PREFIXES = ("http://", "https://", "magnet:")


def is_remote_locator(item: str) -> bool:
    """URLs and magnet links go to the daemon as-is; anything else is a local file."""
    return item.startswith(REMOTE_PREFIXES)
