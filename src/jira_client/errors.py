"""Typed exception hierarchy for Jira-related errors.

This module defines all custom exceptions raised while talking to the Jira
REST API. All exceptions inherit from JiraError so the enrichment engine can
contain any failure of a single ticket at the block boundary.
"""

from typing import Optional


class EnrichError(Exception):
    """Base exception for all jira-enrich errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class JiraError(EnrichError):
    """Base exception for all Jira-related errors."""
    pass


class InvalidCredentialsError(JiraError):
    """Raised when credentials are missing or rejected by Jira."""

    def __init__(self, email: str, endpoint: str):
        super().__init__(
            f"API key is invalid (email: {email}, endpoint: {endpoint})"
        )
        self.email = email
        self.endpoint = endpoint


class IssueNotFoundError(JiraError):
    """Raised when the requested issue does not exist or is not visible."""

    def __init__(self, ticket_id: str):
        super().__init__(f"Issue {ticket_id} not found")
        self.ticket_id = ticket_id


class APIUnreachableError(JiraError):
    """Raised when the Jira API cannot be reached."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class APIAccessError(JiraError):
    """Raised when an API call fails with an unexpected status or after retries."""

    def __init__(self, message: str = "Jira API failure (after 3 retries)", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(JiraError):
    """Raised when a response body is not a usable issue record."""

    def __init__(self, ticket_id: str, reason: str):
        super().__init__(f"Malformed response for issue {ticket_id}: {reason}")
        self.ticket_id = ticket_id
        self.reason = reason
