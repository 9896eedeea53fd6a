"""
ymake command-line interface.

This module implements the `ymake [TARGET]` command using argparse.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from ymake.config.parser import DEFAULT_CONFIG_NAME, BuildConfig, parse_config
from ymake.core.exceptions import YMakeError
from ymake.engine import build

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("ymake")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "YMAKE_LOG_LEVEL"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CLI:
    """ymake command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="ymake",
            description="ymake - Make-like builds described in YAML",
            epilog=f'Targets and variables are read from "{DEFAULT_CONFIG_NAME}" in the build directory',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "target",
            nargs="?",
            metavar="TARGET",
            help="Target to build (default: first target in the file)",
        )
        parser.add_argument(
            "--version", action="version", version=f"ymake {__version__}"
        )
        parser.add_argument(
            "--directory",
            "-C",
            type=Path,
            metavar="DIR",
            default=Path("."),
            help="Build directory; commands run here (default: current directory)",
        )
        parser.add_argument(
            "--file",
            "-f",
            type=Path,
            metavar="FILE",
            default=Path(DEFAULT_CONFIG_NAME),
            help=f"Configuration file, relative to DIR (default: {DEFAULT_CONFIG_NAME})",
        )
        parser.add_argument(
            "--dry-run",
            "-n",
            action="store_true",
            help="Print the expanded commands without running them",
        )
        parser.add_argument(
            "--list",
            "-l",
            action="store_true",
            help="List declared targets and exit",
        )
        parser.add_argument(
            "--log-level",
            type=str.upper,
            choices=LOG_LEVELS,
            metavar="LEVEL",
            default=None,
            help=f"Logging level (default: ${LOG_LEVEL_ENV} or INFO)",
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        try:
            return self._run_build(parsed_args)
        except KeyboardInterrupt:
            logger.info("Build interrupted by user")
            return 130  # Standard exit code for SIGINT
        except YMakeError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging from --log-level, verbose/quiet flags or the environment.

        Args:
            args: Parsed arguments
        """
        if args.verbose:
            level_name = "DEBUG"
        elif args.quiet:
            level_name = "ERROR"
        elif args.log_level:
            level_name = args.log_level
        else:
            level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
            if level_name not in LOG_LEVELS:
                level_name = "INFO"

        level = getattr(logging, level_name)
        if level <= logging.DEBUG:
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif level >= logging.ERROR:
            format_str = "%(levelname)s: %(message)s"
        else:
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _run_build(self, args) -> int:
        """
        Load the configuration and build the requested target.

        Args:
            args: Parsed arguments

        Returns:
            Exit code
        """
        directory = Path(args.directory)
        if not directory.is_dir():
            logger.error(f"Error: Path is not a directory: {directory}")
            return 1

        config_file = args.file if args.file.is_absolute() else directory / args.file
        config = parse_config(config_file)

        if args.list:
            self._print_targets(config)
            return 0

        logger.debug(f"Build directory: {directory.resolve()}")
        report = build(
            config, args.target, cwd=directory, dry_run=args.dry_run
        )

        logger.debug(
            f"Built {len(report.targets)} target(s), {len(report.commands)} command(s)"
        )
        return 0

    @staticmethod
    def _print_targets(config: BuildConfig):
        """Print each target with its dependencies, default target first."""
        for name, target in config.targets.items():
            suffix = " (default)" if name == config.default_target else ""
            deps = f": {' '.join(target.deps)}" if target.deps else ""
            print(f"{name}{deps}{suffix}")


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
