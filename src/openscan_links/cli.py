"""Command line entry point for openscan-links."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import ExplorerConfig
from .exceptions import OpenScanError
from .server import ExplorerSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openscan-links",
        description="Serve the OpenScan explorer for a local Hardhat project",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser(
        "serve",
        help="Serve the explorer webapp until interrupted",
        description=(
            "Serve the explorer bundle with Ignition deployment data injected. "
            "Raw deployments are only tracked when a host passes node traffic "
            "to ExplorerSession.on_request."
        ),
    )
    serve.add_argument("--project-root", help="Hardhat project root (default: cwd)")
    serve.add_argument("--dist", dest="dist_path", help="Explorer bundle directory")
    serve.add_argument("--port", type=int, help="Webapp port (default: 3030)")
    serve.add_argument("--no-browser", action="store_true", help="Do not open a browser")

    artifacts = subparsers.add_parser(
        "artifacts", help="Print the artifact data the explorer would receive"
    )
    artifacts.add_argument("--project-root", help="Hardhat project root (default: cwd)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "artifacts":
            config = ExplorerConfig.from_env(project_root=args.project_root)
            session = ExplorerSession(config)
            print(json.dumps(session.aggregator.to_json() or {}, indent=2))
            return 0

        config = ExplorerConfig.from_env(
            project_root=args.project_root,
            dist_path=args.dist_path,
            port=args.port,
            open_browser=False if args.no_browser else None,
        )
        session = ExplorerSession(config)
        try:
            started = session.start(block_process=True)
        except KeyboardInterrupt:
            started = True
        finally:
            session.stop()
        return 0 if started else 1
    except OpenScanError as e:
        logging.getLogger(__name__).error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
