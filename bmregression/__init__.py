"""
bmregression - regression testing for the BondMachine examples

Runs the commands declared in a catalog of regression cases against a checkout of the example sources and compares
what they produce with the expected outputs stored in the catalog.
"""

from .executor import Action, Outcome, RegressionExecutor, Verdict
from .runner import RegressionRunner

__version__ = "1.0.0"

__all__ = ["Action", "Outcome", "RegressionExecutor", "RegressionRunner", "Verdict", "main"]


def main(command_line_args: list[str] | None = None) -> int:
    """Main entry point for the bmregression command"""
    from bmregression.cli import main as cli_main

    return cli_main(command_line_args)
