"""mongomon - command line entry point."""

import argparse
import logging
import sys
from pathlib import Path

from mongomon import __version__
from mongomon.catalog import compile_catalog
from mongomon.config import Config
from mongomon.monitor import StatusMonitor
from mongomon.sink import StreamSink
from mongomon.source import StatusSource

logger = logging.getLogger(__name__)

BANNER = f"_bevent:Boundary MongoDB plugin up : version {__version__}|t:info|tags:python,mongodb,plugin"
DEFAULT_PARAM_FILE = "param.json"


def configure_logging(level: str = "WARNING") -> None:
    """Send diagnostics to stderr as bare message lines."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("mongomon")
    root.handlers[:] = [handler]
    root.setLevel(level)


def load_config(param: str | None) -> Config:
    """Load parameters from ``param``, or from ``param.json`` when it exists."""
    if param is not None:
        return Config.from_json(param)
    if Path(DEFAULT_PARAM_FILE).is_file():
        return Config.from_json(DEFAULT_PARAM_FILE)
    return Config()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mongomon", description="Report MongoDB server status metrics."
    )
    parser.add_argument(
        "--param",
        type=str,
        default=None,
        help=f"Path to the JSON parameter file (default: ./{DEFAULT_PARAM_FILE} if present)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Diagnostic verbosity on stderr",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the mongomon collector."""
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args.param)
    except (OSError, ValueError) as exc:
        logger.error("Could not load parameters: %s", exc)
        return 2

    errors = config.validate()
    if errors:
        logger.error("Configuration validation failed:")
        for err in errors:
            logger.error("  - %s", err)
        return 2

    print(BANNER, flush=True)

    with StatusSource(config.hostname, config.port) as source:
        monitor = StatusMonitor(
            source.fetch,
            compile_catalog(config.source),
            StreamSink(),
            poll_rate=config.poll_interval_seconds,
        )
        logger.info("Polling %s every %dms", source.url, config.poll_interval)
        try:
            monitor.run()
        except KeyboardInterrupt:
            monitor.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
