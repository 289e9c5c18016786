"""Jira client library for issue enrichment.

This package provides a small async client over the Jira Cloud REST API v2:
credentials, an injectable HTTP transport and the IssueFetcher that turns a
browse URL into an IssueRecord.
"""

from .errors import (
    EnrichError,
    JiraError,
    InvalidCredentialsError,
    IssueNotFoundError,
    APIUnreachableError,
    APIAccessError,
    MalformedResponseError,
)
from .auth import Authenticator, Credentials
from .models import IssueRecord
from .transport import HttpTransport, HttpxTransport, TransportResponse
from .issue_fetcher import IssueFetcher, parse_ticket_id

__all__ = [
    "EnrichError",
    "JiraError",
    "InvalidCredentialsError",
    "IssueNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "MalformedResponseError",
    "Authenticator",
    "Credentials",
    "IssueRecord",
    "HttpTransport",
    "HttpxTransport",
    "TransportResponse",
    "IssueFetcher",
    "parse_ticket_id",
]
