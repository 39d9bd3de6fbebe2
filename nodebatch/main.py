"""
Nodebatch command-line interface.

Runs one bulk operation against many Jenkins nodes with a single request:
the operation is rendered as Groovy and evaluated by the server's script
console, which fans the work out internally.

Usage:
    nodebatch <server URL> <username> <command> [arguments ...]
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from nodebatch import __version__
from nodebatch.config import ClientConfig, get_config_provider
from nodebatch.errors import (
    CredentialError,
    CrumbError,
    NodebatchError,
    UnrecognizedCommandError,
    UsageError,
)
from nodebatch.logging_config import setup_logging
from nodebatch.modules.auth import netrc_credentials
from nodebatch.modules.router import Verb, generate_script
from nodebatch.modules.transport import ScriptConsoleClient

logger = logging.getLogger("nodebatch.cli")

# Diagnostics go to stderr; stdout is reserved for script console output
err_console = Console(stderr=True, highlight=False)

COMMAND_HELP = {
    Verb.CONNECT: ("<nodename ...>", "Connect to and launch agent on nodes"),
    Verb.DISCONNECT: ("<nodename ...>", "Disconnect nodes from Jenkins"),
    Verb.ONLINE: ("<nodename ...>", "Mark nodes online"),
    Verb.OFFLINE: ("<nodename ...>", "Mark nodes administratively offline"),
    Verb.LABELS: ("[nodename ...]", "Print labels for all (or specified) nodes"),
    Verb.STATUS: ("[nodename ...]", "Print status for all (or specified) nodes"),
    Verb.LIST: ("", "Print names of all nodes"),
}


def usage_text(prog: str = "nodebatch") -> str:
    lines = [
        f"Usage: {prog} <server URL> <username> <command> [arguments ...]",
        "  Commands:",
    ]
    for verb, (args, description) in COMMAND_HELP.items():
        synopsis = f"{verb.value} {args}".strip()
        lines.append(f"    {synopsis:<32}- {description}")
    return "\n".join(lines)


def print_usage(prog: str = "nodebatch") -> None:
    click.echo(usage_text(prog))


def prompt_password() -> str:
    """Read the password from the terminal without echoing it."""
    try:
        return click.prompt("Password", default="", hide_input=True, show_default=False, err=True)
    except click.Abort:
        raise CredentialError("No password entered") from None


def build_client(server_url: str, netrc_file: Path, config: ClientConfig) -> ScriptConsoleClient:
    return ScriptConsoleClient(
        server_url,
        netrc_file,
        verify=config.verify_setting,
        timeout=config.timeout,
    )


def run(
    server_url: str,
    username: str,
    command: str,
    nodes: Sequence[str],
    config: ClientConfig,
    dry_run: bool = False,
    prog: str = "nodebatch",
) -> int:
    """
    Execute one node command end to end.

    The script is generated before any credentials are requested, so a
    mistyped command never prompts for a password.

    Returns:
        Process exit code
    """
    try:
        script = generate_script(command, nodes, actor=username)
    except UnrecognizedCommandError as e:
        click.echo(str(e))
        print_usage(prog)
        return e.exit_code
    except ValueError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        print_usage(prog)
        return 1

    if dry_run:
        click.echo(script, nl=False)
        return 0

    try:
        password = config.password or prompt_password()
        with netrc_credentials(server_url, username, password) as netrc_file:
            with build_client(server_url, netrc_file, config) as client:
                crumb = client.fetch_crumb()
                result = client.submit_script(script, crumb)
                return result.exit_code
    except CrumbError as e:
        err_console.print(
            f"[red]Error getting authentication nonce ('crumb') from Jenkins, aborting: "
            f"{escape(str(e))}[/red]"
        )
        return e.exit_code
    except NodebatchError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        return e.exit_code


EXIT_CODES_EPILOG = """\b
Exit codes:
  0   script submitted, server answered 2xx
  1   usage error (missing arguments, bad option)
  2   credential file or password failure
  3   could not obtain the crumb
  4   unrecognized command
  7   could not connect (curl numbering)
  22  server answered with an HTTP error; unlike plain curl this is not 0
  28  request timed out
  56  other transport failure

Node names starting with '-' must follow '--'."""


class NodebatchCommand(click.Command):
    """click command whose own usage errors share exit code 1 with ours."""

    def parse_args(self, ctx: click.Context, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = UsageError.exit_code
            raise


@click.command(
    cls=NodebatchCommand,
    epilog=EXIT_CODES_EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("server_url", required=False)
@click.argument("username", required=False)
@click.argument("command", required=False)
@click.argument("nodes", nargs=-1)
@click.option("--dry-run", is_flag=True, help="Print the generated Groovy instead of running it")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds (default: none)")
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option(
    "--ca-cert",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="CA bundle used to verify the server",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: $LOG_LEVEL or WARNING)",
)
@click.version_option(__version__, prog_name="nodebatch")
@click.pass_context
def main(
    ctx: click.Context,
    server_url: Optional[str],
    username: Optional[str],
    command: Optional[str],
    nodes: Sequence[str],
    dry_run: bool,
    timeout: Optional[float],
    insecure: bool,
    ca_cert: Optional[str],
    log_level: Optional[str],
):
    """Run bulk operations against Jenkins nodes through the script console."""
    prog = ctx.info_name or "nodebatch"
    if command is None:
        print_usage(prog)
        ctx.exit(1)

    load_dotenv()
    try:
        config = get_config_provider().get_client_config().with_overrides(
            timeout=timeout,
            ca_cert=ca_cert,
            log_level=log_level.upper() if log_level else None,
            verify_ssl=False if insecure else None,
        )
        setup_logging(config.log_level)
    except ValueError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)

    logger.debug(f"Running {command} against {server_url} as {username}")
    ctx.exit(run(server_url, username, command, nodes, config, dry_run=dry_run, prog=prog))


if __name__ == "__main__":
    main()
