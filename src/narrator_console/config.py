"""
Command line and environment configuration.
"""

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

from dotenv import load_dotenv

from narrator_console import __version__

DEFAULT_ENDPOINT = "http://ml:8888/v1"
DEFAULT_MODEL = "default"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class SessionConfig:
    """Connection settings, fixed for the lifetime of the process."""
    endpoint: str
    model: str
    api_key: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))


@dataclass(frozen=True)
class LoggingOptions:
    level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="narrator-console",
        description="The Narrator's Console - an absurdist AI chat companion",
    )
    parser.add_argument(
        "-e",
        "--endpoint",
        default=os.getenv("NARRATOR_ENDPOINT", DEFAULT_ENDPOINT),
        help="API endpoint URL (env: NARRATOR_ENDPOINT)",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=os.getenv("NARRATOR_MODEL", DEFAULT_MODEL),
        help="Model name to use (env: NARRATOR_MODEL)",
    )
    parser.add_argument(
        "-a",
        "--apikey",
        default=os.getenv("NARRATOR_API_KEY") or None,
        help="API key for bearer authentication (env: NARRATOR_API_KEY)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("NARRATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (env: NARRATOR_LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("NARRATOR_LOG_FILE") or None,
        help="Also write log records to this file (env: NARRATOR_LOG_FILE)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> tuple[SessionConfig, LoggingOptions]:
    """
    Resolve the session configuration.

    Values from a ``.env`` file are loaded into the environment first, so
    the precedence is: flag, then environment / ``.env``, then built-in
    default.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)
    config = SessionConfig(endpoint=args.endpoint, model=args.model, api_key=args.apikey)
    return config, LoggingOptions(level=args.log_level, log_file=args.log_file)
