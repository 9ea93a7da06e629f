"""Entry point for containersync."""

import argparse
import logging
import sys
from pathlib import Path

from .config.loader import load_config
from .errors import SyncError
from .synchronizer import RepositorySynchronizer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="containersync",
        description="Commit and push generated container sources to their git remotes.",
    )
    parser.add_argument("source_dir", type=Path, help="Source git repository")
    parser.add_argument("target_dir", type=Path, help="Directory of generated containers")
    parser.add_argument("configs_dir", type=Path, help="Directory of container config files")
    parser.add_argument("--config", type=Path, help="containersync.yaml file or its directory")
    parser.add_argument(
        "--remote-uri-pattern", help="Remote URI pattern with a ${name} placeholder"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run containersync."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except SyncError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    settings = config.settings
    if args.remote_uri_pattern:
        settings = settings.model_copy(update={"git_remote_uri_pattern": args.remote_uri_pattern})

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        report = RepositorySynchronizer(settings).run(
            args.source_dir.resolve(), args.target_dir.resolve(), args.configs_dir.resolve()
        )
    except SyncError as e:
        logger.debug("Synchronization failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    for result in report.results:
        print(f"{result.name}: {result.outcome.value} ({result.remote.uri})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
