"""CLI commands for querying the Discogs database."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from .client import DiscogsClient
from .errors import DiscogsError
from .models import MAX_PER_PAGE, ImageResponse, Pagination

# (subcommand, client method, help, paginated)
RESOURCE_COMMANDS = [
    ("artist", "artist", "Look up an artist", False),
    ("artist-releases", "artist_releases", "List an artist's releases", True),
    ("release", "release", "Look up a release", False),
    ("master", "master", "Look up a master release", False),
    ("master-versions", "master_versions", "List the versions of a master", True),
    ("label", "label", "Look up a label", False),
    ("label-releases", "label_releases", "List a label's releases", True),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query the Discogs database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests (credentials are never logged)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, _, help_text, paginated in RESOURCE_COMMANDS:
        resource_parser = subparsers.add_parser(name, help=help_text)
        resource_parser.add_argument("id", help="Discogs ID")
        if paginated:
            resource_parser.add_argument("--page", type=int, default=None, help="Page number (default: 1)")
            resource_parser.add_argument(
                "--per-page",
                type=int,
                default=None,
                help=f"Results per page (default: DISCOGS_DEFAULT_PER_PAGE or 50, max {MAX_PER_PAGE})",
            )

    # image subcommand
    image_parser = subparsers.add_parser("image", help="Download an image")
    image_parser.add_argument("filename", help="Image filename, e.g. R-1659014-1234.jpg")
    image_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="File to write the image to",
    )

    # search subcommand
    search_parser = subparsers.add_parser("search", help="Search the database")
    search_parser.add_argument(
        "q",
        nargs="?",
        default=None,
        help="Free-text query (e.g., 'artist:afx OR artist:tool')",
    )
    search_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Search parameter (repeatable, e.g., --param type=release)",
    )
    search_parser.add_argument("--page", type=int, default=None, help="Page number (default: 1)")
    search_parser.add_argument(
        "--per-page",
        type=int,
        default=None,
        help=f"Results per page (max {MAX_PER_PAGE})",
    )

    return parser


def _search_params(args) -> dict:
    params = {}
    if args.q is not None:
        params["q"] = args.q
    for p in args.param:
        k, _, v = p.partition("=")
        params[k] = v
    if args.page is not None:
        params["page"] = args.page
    if args.per_page is not None:
        params["per_page"] = args.per_page
    return params


async def run(args, client: DiscogsClient):
    if args.command == "search":
        return await client.search(_search_params(args))
    if args.command == "image":
        return await client.image(args.filename)

    for name, method, _, paginated in RESOURCE_COMMANDS:
        if name == args.command:
            if paginated and (args.page is not None or args.per_page is not None):
                return await getattr(client, method)(args.id, Pagination(args.page, args.per_page))
            return await getattr(client, method)(args.id)

    raise ValueError(f"Unknown command: {args.command}")


async def _main(args) -> int:
    async with DiscogsClient() as client:
        try:
            result = await run(args, client)
        except DiscogsError as e:
            json.dump(e.to_dict(), sys.stderr, indent=2)
            sys.stderr.write("\n")
            return 1

    if isinstance(result, ImageResponse):
        args.output.write_bytes(result.image)
        print(f"Wrote {len(result.image):,} bytes ({result.content_type}) to {args.output}")
        json.dump(asdict(result.rate_limit), sys.stdout, indent=2)
    else:
        json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    if not args.verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    sys.exit(asyncio.run(_main(args)))


if __name__ == "__main__":
    main()
