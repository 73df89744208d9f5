"""
Command-line interface for a Transmission daemon.

Usage:
    tmc add <file/url/magnet>... [--detail] [--delete]
    tmc ls [ID...]
    tmc remove [ID...] [--delete]
    tmc save

Connection flags apply to every command and can also come from
TRANSMISSION_* environment variables or ~/.tmc/config.yaml.
"""

import argparse
import sys
from typing import List, Optional

from . import commands
from .commands import AppContext
from .config import Config, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_USERAGENT, resolve_profile
from .exceptions import TmcError
from .logger import logger, setup_logging
from .transmission_client import TransmissionJobClient


CONNECTION_FLAGS = ("host", "port", "url", "user", "password", "https", "useragent", "path")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmc",
        description="Transmission Client (CUI)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add debian.torrent --delete
  %(prog)s add "magnet:?xt=urn:btih:..." --detail
  %(prog)s ls
  %(prog)s remove 3 7 --delete
  %(prog)s --url https://admin@nas.local/transmission/rpc save
"""
    )

    # Connection flags default to None so unset flags don't mask env/config values
    parser.add_argument("-s", "--host", default=None,
                        help=f"Transmission server host (default: {DEFAULT_HOST})")
    parser.add_argument("-p", "--port", default=None,
                        help=f"Transmission server port (default: {DEFAULT_PORT}, unset)")
    parser.add_argument("--url", default=None,
                        help="Transmission RPC URL, overrides host/user/password/https/port/path")
    parser.add_argument("-u", "--user", default=None, help="Transmission user name")
    parser.add_argument("-w", "--password", default=None, help="Transmission password")
    parser.add_argument("-t", "--https", action="store_true", default=None,
                        help="Use TLS for connection")
    parser.add_argument("--no-https", dest="https", action="store_false", default=None,
                        help="Do not use TLS, overriding environment and config file")
    parser.add_argument("--useragent", default=None,
                        help=f"UserAgent name for HTTP client (default: {DEFAULT_USERAGENT})")
    parser.add_argument("--path", default=None, help="RPC request path (default: /transmission/rpc)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    add_parser = subparsers.add_parser("add", help="Add torrent file or magnet link")
    add_parser.add_argument("items", nargs="+", metavar="FILE_OR_URL",
                            help="Torrent file, HTTP(S) URL or magnet link")
    add_parser.add_argument("--detail", action="store_true",
                            help="Show details of added torrent")
    add_parser.add_argument("--delete", action="store_true",
                            help="Delete torrent file on successful addition")

    ls_parser = subparsers.add_parser("ls", help="List current torrents")
    ls_parser.add_argument("ids", nargs="*", metavar="ID", help="Torrent IDs (default: all)")

    rm_parser = subparsers.add_parser(
        "remove", help="Remove specified torrents or already finished and stopped torrents")
    rm_parser.add_argument("ids", nargs="*", metavar="ID", help="Torrent IDs")
    rm_parser.add_argument("--delete", action="store_true", help="Delete downloaded files")

    subparsers.add_parser("save", help="Save current configuration")

    return parser


def run(args: argparse.Namespace, ctx: AppContext):
    if args.command == "add":
        commands.add(ctx, args.items, detail=args.detail, delete=args.delete)

    elif args.command == "ls":
        commands.ls(ctx, args.ids)

    elif args.command == "remove":
        commands.remove(ctx, args.ids, delete=args.delete)

    elif args.command == "save":
        commands.save(ctx)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(
        verbose=args.verbose or Config.VERBOSE,
        level=Config.LOG_LEVEL,
        path=Config.LOG_PATH,
        rotation=Config.LOG_ROTATION,
        retention=Config.LOG_RETENTION,
    )

    flags = {key: getattr(args, key) for key in CONNECTION_FLAGS}
    try:
        profile = resolve_profile(flags)
        ctx = AppContext(profile=profile)
        if args.command != "save":
            ctx.client = TransmissionJobClient.from_profile(profile)
        run(args, ctx)
    except TmcError as e:
        logger.debug(f"{args.command} failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
