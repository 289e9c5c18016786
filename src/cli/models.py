"""Data models for CLI operations.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Every Jira link was enriched (or there were none)
    - GENERAL_ERROR (1): General error (config issues, unreadable document)
    - BLOCK_ERRORS (2): Walk completed but some blocks could not be enriched
    - AUTH_ERROR (3): Missing credentials
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    BLOCK_ERRORS = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class EnrichConfig:
    """Settings read from .jira-enrich/config.yaml.

    Attributes:
        tenant: Jira tenant; overrides JIRA_TENANT when set
        max_concurrency: Placeholders enriched at the same time
        request_timeout: Per-request HTTP timeout in seconds
        max_retries: Retries on HTTP 429 before a fetch fails

    Example:
        >>> config = EnrichConfig(tenant="acme", max_concurrency=4)
    """
    tenant: Optional[str] = None
    max_concurrency: int = 10
    request_timeout: float = 30.0
    max_retries: int = 3
