"""Run the playtesting MCP server over stdio: python -m atomengine.mcp <content_module>"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m atomengine.mcp",
        description="Serve an Atom Clicker session as MCP tools over stdio",
        epilog="Example: python -m atomengine.mcp examples.atom_example",
    )
    parser.add_argument("content_module", help="Python module with define_content()")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log unlocks and recomputes to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # define_content() may print; keep that off the protocol stream too
    with contextlib.redirect_stdout(sys.stderr):
        from atomengine.cli import load_content

        content = load_content(args.content_module)

    from atomengine.mcp.server import create_server

    server = create_server(content)
    logging.getLogger(__name__).info(
        "Serving %r with %d buildings", content.config.name, len(content.buildings)
    )
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
