"""
Command-line interface for ci-status.

Displays the status of CI checks for a commit, a pull request, or a
pull request URL, and exits with a code reflecting the overall state.
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import ColorMode, ConfigLoader
from .errors import CIStatusError
from .runner import CIStatusRunner
from .status import ReportSpec

console = Console()
err_console = Console(stderr=True)


def colorize_output(mode: ColorMode, terminal: Optional[Console] = None) -> bool:
    """
    Decide whether to emit colors.

    Args:
        mode: Requested color mode
        terminal: Console used for terminal detection in auto mode
    """
    if mode == ColorMode.ALWAYS:
        return True
    if mode == ColorMode.NEVER:
        return False
    return (terminal or console).is_terminal


class ColorFlagCommand(click.Command):
    """
    Command whose --color option only takes a value as --color=WHEN.

    A bare --color means "always" and never consumes the next argument.
    """

    def parse_args(self, ctx, args):
        rewritten = []
        for index, arg in enumerate(args):
            if arg == "--":
                rewritten.extend(args[index:])
                break
            rewritten.append(f"--color={ColorMode.ALWAYS.value}" if arg == "--color" else arg)
        return super().parse_args(ctx, rewritten)


# ============================================================
# Main Command
# ============================================================

@click.command("ci-status", cls=ColorFlagCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="ci-status")
@click.argument("ref", required=False)
@click.option("--verbose", "-v", is_flag=True, help="Print detailed report of all status checks and their URLs")
@click.option(
    "--format",
    "-f",
    "format_string",
    type=str,
    default=None,
    help="Pretty print all status checks using FORMAT (implies --verbose)",
)
@click.option(
    "--color",
    type=click.Choice([m.value for m in ColorMode]),
    default=None,
    metavar="[=WHEN]",
    help="Enable colored output even if stdout is not a terminal",
)
@click.option("--noop", "-n", is_flag=True, help="Resolve the commit but do not request its status")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Settings file")
@click.option("--host", type=str, help="Hosting service hostname (default: github.com)")
@click.option("--remote", type=str, help="Git remote used to find the repository")
@click.option("--debug", is_flag=True, help="Print diagnostics to stderr")
def cli(
    ref: Optional[str],
    verbose: bool,
    format_string: Optional[str],
    color: Optional[str],
    noop: bool,
    config_path: Optional[str],
    host: Optional[str],
    remote: Optional[str],
    debug: bool,
):
    """
    Display status of GitHub checks for a commit.

    REF is a commit SHA or branch name (default: HEAD), a pull request
    ID such as PR1234, or a pull request URL.

    \b
    Format placeholders:
      %U   the URL of this status check
      %S   check state (e.g. "success", "failure")
      %sC  set color to red, green, or yellow, depending on state
      %t   name of the status check

    \b
    Exit statuses:
      success, neutral: 0
      failure, error, action_required, cancelled, timed_out: 1
      pending: 2
    """
    try:
        settings = ConfigLoader(config_path).load(
            host=host,
            remote=remote,
            color=color,
        )

        colorize = colorize_output(settings.color)
        spec = ReportSpec(
            verbose=verbose or format_string is not None,
            format=format_string or (settings.format if verbose else None) or "",
            colorize=colorize,
        )

        runner = CIStatusRunner(settings, console=err_console, debug=debug)
        code = runner.run(
            ref,
            spec,
            noop=noop,
            echo=lambda line: click.echo(line, color=colorize),
        )
    except CIStatusError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    sys.exit(code)


def main():
    cli()


if __name__ == "__main__":
    main()
