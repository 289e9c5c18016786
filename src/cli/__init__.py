"""Command-line interface for Jira link enrichment.

This package provides the `jira-enrich` CLI tool that loads a document file,
replaces its Jira links with issue summaries and writes it back, with
progress indication and error handling.
"""

from .enrich_command import EnrichCommand
from .models import ExitCode, EnrichConfig
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
)

__all__ = [
    'EnrichCommand',
    'ExitCode',
    'EnrichConfig',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
