"""Command-line interface for bmregression.

CLI argument parsing, logging configuration, and the ``main()`` entry point live here. Repository acquisition is
delegated to the provision module and the regression logic to the runner module; error handling is centralized around
the exceptions defined in the exceptions module.
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path

from bmregression.exceptions import CliError, ExitCode, UsageError
from bmregression.executor import Action
from bmregression.provision import DATA_URL, EXAMPLES_URL, resolve_roots
from bmregression.runner import RegressionRunner
from bmregression.settings import Settings
from bmregression.tags import parse_tag_option

SUBCOMMANDS = {
    "list": "List the available regressions",
    "describe": "Describe one or more regressions",
    "run": "Run one or more regressions",
    "reset": "Reset one or more regressions",
    "diff": "Diff the results of one or more regressions",
}


def setup_logging(verbosity_level: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity_level: 0=WARNING, 1=INFO, 2+=DEBUG
    """
    if verbosity_level == 0:
        level = logging.WARNING
    elif verbosity_level == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        prog="bmregression",
        description="Regression testing tool for the BondMachine examples",
        exit_on_error=True,
    )
    argument_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    argument_parser.add_argument("-d", "--debug", action="store_true", help="Debug output, same as -vv")
    argument_parser.add_argument(
        "-t",
        "--tag",
        default="default",
        help="Comma-separated tags selecting the regressions (default: default)",
    )
    argument_parser.add_argument(
        "--examples-dir",
        default=None,
        help="Existing checkout of the examples repository; cloned into a temporary directory if omitted",
    )
    argument_parser.add_argument(
        "--data-dir",
        default=None,
        help="Existing checkout of the regression data repository; cloned into a temporary directory if omitted",
    )
    argument_parser.add_argument("--examples-url", default=EXAMPLES_URL, help="Examples repository URL")
    argument_parser.add_argument("--data-url", default=DATA_URL, help="Regression data repository URL")
    argument_parser.add_argument(
        "--timeout",
        type=int,
        default=0,
        help="Timeout in seconds for each regression command (default: 0, no timeout)",
    )
    argument_parser.add_argument("--report", default=None, metavar="FILE", help="Write a YAML report to FILE")

    subparsers = argument_parser.add_subparsers(dest="command", metavar="COMMAND")
    for command, help_text in SUBCOMMANDS.items():
        subparser = subparsers.add_parser(command, help=help_text)
        subparser.add_argument(
            "name",
            nargs="?",
            default="",
            help="Select regressions whose name contains NAME (default: all)",
        )
    return argument_parser


def main(command_line_args: list[str] | None = None) -> int:
    """Main entry point for command line execution.

    Args:
        command_line_args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code for the process
    """
    parsed_args = build_parser().parse_args(command_line_args)

    setup_logging(2 if parsed_args.debug else parsed_args.verbose)

    if parsed_args.command is None:
        raise UsageError("No command specified")
    if parsed_args.timeout < 0:
        raise UsageError("--timeout must not be negative")
    if parsed_args.report and not Path(parsed_args.report).resolve().parent.is_dir():
        raise UsageError(f"--report directory does not exist: {Path(parsed_args.report).parent}")

    with resolve_roots(
        parsed_args.examples_dir,
        parsed_args.data_dir,
        parsed_args.examples_url,
        parsed_args.data_url,
    ) as (source_root, catalog_root):
        settings = Settings(
            source_root=source_root,
            catalog_root=catalog_root,
            tags=parse_tag_option(parsed_args.tag),
            timeout=parsed_args.timeout or None,
            report_file=Path(parsed_args.report) if parsed_args.report else None,
        )
        runner = RegressionRunner(settings)
        if parsed_args.command == "list":
            return runner.list_regressions(parsed_args.name)
        return runner.run(Action(parsed_args.command), parsed_args.name)


def entry_point() -> None:
    """Console script wrapper mapping exceptions to exit codes."""
    try:
        sys.exit(main())
    except CliError as e:
        logging.error(e)
        sys.exit(e.exit_code)
    except Exception:
        logging.error("internal error (use -vv for traceback)")
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL)


if __name__ == "__main__":
    entry_point()
