"""Command-line interface for smb-file-check."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from smb_file_check import __version__
from smb_file_check.check import CheckOptions, FileChecker
from smb_file_check.config import Config, create_example_config
from smb_file_check.exceptions import UsageError
from smb_file_check.models import AggregateResult, CheckResult, Status
from smb_file_check.transports import TRANSPORTS, create_transport
from smb_file_check.units import Property

# stdout carries exactly one plugin line, everything else goes to stderr
console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def status_color(status: Status) -> str:
    """Get Rich color for a status."""
    colors = {
        Status.OK: "green",
        Status.WARNING: "yellow",
        Status.CRITICAL: "red",
        Status.UNKNOWN: "dim",
    }
    return colors.get(status, "white")


def create_findings_table(result: CheckResult) -> Table:
    """Create a Rich table listing every non-clean object."""
    table = Table(title="File Check Findings", show_header=True, header_style="bold")

    table.add_column("Object", style="cyan", no_wrap=True)
    table.add_column("Status", justify="center")
    table.add_column("Detail")

    for finding in result.findings:
        table.add_row(
            finding.object_key,
            Text(finding.status.value, style=status_color(finding.status)),
            finding.message,
        )

    if isinstance(result, AggregateResult):
        table.caption = (
            f"{result.objects_checked} checked, "
            f"thresholds {result.threshold_critical} crit / {result.threshold_warning} warn, "
            f"patterns {result.pattern_critical} crit / {result.pattern_warning} warn"
        )

    return table


def load_config(path: Optional[str]) -> Config:
    """Load the given config file, or the first one found in the default locations."""
    if path:
        return Config.from_yaml(path)
    return Config.find()


def exit_unknown(message: str) -> None:
    click.echo(f"{Status.UNKNOWN.value}: {message}")
    sys.exit(Status.UNKNOWN.exit_code)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """smb-file-check - Check files and directories on network shares."""
    pass


@main.command()
@click.option("-H", "--host", help="The hostname to check")
@click.option("-f", "--filename", required=True, help="Share and path of the file or directory")
@click.option(
    "-p", "--property", "prop",
    default="modified",
    type=click.Choice(["modified", "accessed", "size"], case_sensitive=False),
    help="The property to test (default: modified)",
)
@click.option("-w", "--warning", help="Warning if the property exceeds value (e.g. 5days, 800KB)")
@click.option("-c", "--critical", help="Critical if the property exceeds value")
@click.option("--warning-match", help="Warning if contents match regex")
@click.option("--critical-match", help="Critical if contents match regex")
@click.option("--match-case", is_flag=True, help="Pattern matching is case sensitive")
@click.option("-D", "--directory", is_flag=True, help="Check every matching file in a directory")
@click.option("-n", "--name-match", help="Regex file names must match in directory mode")
@click.option("--warning-count", type=int, help="Warning if at least this many files match")
@click.option("--critical-count", type=int, help="Critical if at least this many files match")
@click.option("--no-perfdata", is_flag=True, help="Do not emit performance data")
@click.option(
    "-T", "--transport",
    type=click.Choice(TRANSPORTS),
    help="File access protocol (default: smb)",
)
@click.option("-U", "--username", help="The username to connect with")
@click.option("-P", "--password", help="The password to authenticate with")
@click.option("-W", "--workgroup", help="The workgroup the username is located in")
@click.option("-K", "--kerberos", is_flag=True, help="Use Kerberos for authentication")
@click.option("--port", type=int, help="Port to connect to (default: protocol default)")
@click.option("--timeout", type=int, help="Connection timeout in seconds")
@click.option(
    "-C", "--config",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option("--json", "output_json", is_flag=True, help="Output in JSON format")
@click.option("-v", "--verbose", is_flag=True, help="Show per-object findings on stderr")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
def check(
    host: Optional[str],
    filename: str,
    prop: str,
    warning: Optional[str],
    critical: Optional[str],
    warning_match: Optional[str],
    critical_match: Optional[str],
    match_case: bool,
    directory: bool,
    name_match: Optional[str],
    warning_count: Optional[int],
    critical_count: Optional[int],
    no_perfdata: bool,
    transport: Optional[str],
    username: Optional[str],
    password: Optional[str],
    workgroup: Optional[str],
    kerberos: bool,
    port: Optional[int],
    timeout: Optional[int],
    config: Optional[str],
    output_json: bool,
    verbose: bool,
    log_level: Optional[str],
) -> None:
    """Test the existence, age, size or contents of a file on a share."""
    cfg = load_config(config)
    setup_logging(log_level or cfg.log_level)

    connection = cfg.connection.merged(
        transport=transport,
        username=username,
        password=password,
        workgroup=workgroup,
        kerberos=kerberos or None,
        port=port,
        timeout=timeout,
    )
    if not host and connection.transport != "local":
        raise UsageError("Host not specified")

    options = CheckOptions(
        prop=Property.parse(prop),
        warning=warning,
        critical=critical,
        warning_match=warning_match,
        critical_match=critical_match,
        case_sensitive=match_case,
        directory=directory,
        name_match=name_match,
        warning_count=warning_count,
        critical_count=critical_count,
        perfdata=not no_perfdata,
    )
    checker = FileChecker(create_transport(connection.transport, host or "", connection), options)
    result = checker.run(filename)

    if output_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(result.format_line())

    if verbose and result.findings:
        console.print(create_findings_table(result))

    sys.exit(result.status.exit_code)


@main.command()
@click.option(
    "-o", "--output",
    default="smb-file-check.yaml",
    help="Output file path",
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing file",
)
def init(output: str, force: bool) -> None:
    """Create an example configuration file."""
    path = Path(output)

    if path.exists() and not force:
        console.print(f"[red]File already exists: {path}[/]")
        console.print("Use --force to overwrite")
        sys.exit(1)

    example = create_example_config()
    example.to_yaml(path)

    console.print(f"[green]Created example configuration: {path}[/]")
    console.print("Edit this file to set your share credentials.")


def run() -> None:
    """Console entry point. Usage errors exit UNKNOWN rather than click's code 2."""
    try:
        code = main(standalone_mode=False)
    except (click.ClickException, UsageError) as e:
        message = e.format_message() if isinstance(e, click.ClickException) else str(e)
        exit_unknown(message)
    except click.exceptions.Abort:
        exit_unknown("Aborted")
    else:
        sys.exit(code or 0)


if __name__ == "__main__":
    run()
