"""Main CLI entry point for jira-enrich command.

This module provides the Typer application that serves as the entry point
for the jira-enrich command-line tool.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.enrich_command import EnrichCommand
from src.cli.output import OutputHandler

__version__ = "0.1.0"

app = typer.Typer(
    name="jira-enrich",
    help="""Replace Jira links in a document with the issue key, summary and assignee.

QUICK START:
  jira-enrich notes.json                      # Enrich in place
  jira-enrich notes.json --dry-run -v 1       # Preview, do not write
  jira-enrich notes.json --output out.json    # Write to another file

Credentials are read from JIRA_TENANT, JIRA_EMAIL and JIRA_API_KEY
(environment or .env file).""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"jira-enrich_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jira-enrich version {__version__}")
        raise typer.Exit()


@app.command()
def main_command(
    document: str = typer.Argument(
        ...,
        help="Document JSON file to enrich",
    ),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help="Configuration YAML file",
        metavar="PATH",
    ),
    tenant: Optional[str] = typer.Option(
        None,
        "--tenant",
        help="Jira tenant (the 'acme' in acme.atlassian.net); overrides JIRA_TENANT",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Enrich in memory and show the summary without writing the document",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the enriched document here instead of overwriting DOCUMENT",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Replace Jira links in DOCUMENT with the issue key, summary and assignee.

    \b
    EXAMPLES:
      jira-enrich notes.json
      jira-enrich notes.json --tenant acme --dry-run -v 1
      jira-enrich notes.json --output enriched.json --logdir ./logs
    """
    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    command = EnrichCommand(config_path=config_path, output_handler=output)

    exit_code = command.run(
        document_path=document,
        tenant=tenant,
        dry_run=dry_run,
        output_path=output_path,
    )
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
