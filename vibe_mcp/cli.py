#!/usr/bin/env python3
"""
Vibe MCP CLI Entry Point

Handles:
- Argument parsing (transport, port, repository root)
- Server modes (stdio, http)
"""

import argparse
import asyncio
import sys

from vibe_mcp import __version__, __package_name__
from vibe_mcp.config import ConfigManager, DEFAULT_ASSETS_DIR, DEFAULT_HOST, DEFAULT_PORT, validate_port
from vibe_mcp.errors import TransportStartError
from vibe_mcp.utils import Logger


def port_number(value: str) -> int:
    """argparse type for --port: an integer in 1-65535."""
    try:
        return validate_port(int(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid port: {value}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=__package_name__,
        description="Vibe MCP - serve repository prompts, agents, instructions and skills over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  vibe-mcp                            stdio transport (default)
  vibe-mcp --http                     HTTP/SSE on port 3000
  vibe-mcp --http --port 8080         HTTP/SSE on port 8080
  vibe-mcp --repo-root /path/to/repo  serve another repository

MCP Configuration (.vscode/mcp.json):

  {
    "servers": {
      "vibe": {
        "command": "vibe-mcp",
        "args": ["--repo-root", "${workspaceFolder}"]
      }
    }
  }
"""
    )

    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show version and exit"
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Use HTTP/SSE transport instead of stdio"
    )
    parser.add_argument(
        "--port", "-p",
        type=port_number,
        default=None,
        help=f"HTTP server port (default: {DEFAULT_PORT}, only with --http)"
    )
    parser.add_argument(
        "--host",
        default=None,
        help=f"HTTP bind address (default: {DEFAULT_HOST}, only with --http)"
    )
    parser.add_argument(
        "--repo-root",
        default=None,
        help="Repository root path (default: current directory)"
    )
    parser.add_argument(
        "--assets-dir",
        default=None,
        help=f"Asset directory under the repository root (default: {DEFAULT_ASSETS_DIR})"
    )
    return parser


def config_overrides(args: argparse.Namespace, logger: Logger) -> dict:
    """Map parsed arguments onto Config fields (None means "not given")."""
    if args.port is not None and not args.http:
        logger.warning("--port has no effect without --http; using stdio transport")

    return {
        "http": args.http,
        "http_port": args.port if args.http else None,
        "host": args.host if args.http else None,
        "repo_root": args.repo_root,
        "assets_dir": args.assets_dir,
    }


async def main_async(args: argparse.Namespace, logger: Logger) -> None:
    """Initialize the registry, then run the selected transport."""
    from vibe_mcp.server import VibeMCPServer

    server = VibeMCPServer(ConfigManager(config_overrides(args, logger)))
    await server.initialize()
    config = server.config.get()

    print(f"{__package_name__} MCP Server v{__version__}", file=sys.stderr)
    print(f"  Repo root: {config.repo_root}", file=sys.stderr)
    print(f"  Transport: {config.transport_label}", file=sys.stderr)

    if config.http:
        from vibe_mcp.server_http import run_http
        await run_http(server, config.host, config.http_port)
    else:
        await server.start()


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    if args.version:
        print(f"{__package_name__} v{__version__}")
        sys.exit(0)

    logger = Logger(name=__package_name__, level="INFO")

    try:
        asyncio.run(main_async(args, logger))
    except TransportStartError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
