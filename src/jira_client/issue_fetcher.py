"""Fetching issue records from the Jira Cloud REST API v2.

This module turns the URL stored in a placeholder link block into one
IssueRecord. It extracts the ticket id from the URL, performs an
authenticated GET against the issue endpoint through an injected
HttpTransport, and translates HTTP failures to the typed exception hierarchy.
"""

import logging
import re
from typing import Any, Dict, Optional

from .auth import Credentials, basic_auth_token
from .errors import (
    APIAccessError,
    InvalidCredentialsError,
    IssueNotFoundError,
    JiraError,
    MalformedResponseError,
)
from .models import IssueRecord
from .retry_logic import RateLimitedError, retry_on_rate_limit
from .transport import HttpTransport, TransportResponse

logger = logging.getLogger(__name__)

# Marker that precedes the ticket id in a Jira browse URL
TICKET_MARKER = 'browse/'

ISSUE_ENDPOINT = 'https://{tenant}.atlassian.net/rest/api/2/issue/{ticket_id}'
BROWSE_URL = 'https://{tenant}.atlassian.net/browse/{key}'


def parse_ticket_id(url: str) -> Optional[str]:
    """Extract the ticket id that follows 'browse/' in a Jira URL.

    Args:
        url: Link URL taken from a placeholder block

    Returns:
        The ticket id (e.g., "PROJ-7"), or None if the URL carries no
        'browse/' marker or nothing follows it

    Example:
        >>> parse_ticket_id("https://x.atlassian.net/browse/PROJ-7?focus=1")
        'PROJ-7'
        >>> parse_ticket_id("https://example.com/PROJ-7") is None
        True
    """
    if not url or TICKET_MARKER not in url:
        return None

    remainder = url.split(TICKET_MARKER, 1)[1]
    ticket_id = re.split(r'[/?#]', remainder, 1)[0].strip()
    return ticket_id or None


def sanitize_credentials(text: str) -> str:
    """Mask credentials in error messages and log lines.

    Masks Authorization headers, Basic and Bearer tokens, api key fields and
    the local part of e-mail addresses.

    Example:
        >>> sanitize_credentials("Authorization: Basic YW5uOmtleQ==")
        'Authorization: ***REDACTED***'
    """
    if not text:
        return text

    sanitized = text

    sanitized = re.sub(
        r'://([\w.-]+):([\w.-]+)@',
        r'://***:***@',
        sanitized
    )

    sanitized = re.sub(
        r'Authorization:\s*[^\n\r]+',
        'Authorization: ***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )

    sanitized = re.sub(
        r'\b(Basic|Bearer)\s+[A-Za-z0-9+/=._-]{6,}',
        r'\1 ***REDACTED***',
        sanitized,
    )

    sanitized = re.sub(
        r'(api_?key|api_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
        r'\1=***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )

    sanitized = re.sub(
        r'\b[\w.+-]+@([\w.-]+\.[a-z]{2,})\b',
        r'***@\1',
        sanitized,
        flags=re.IGNORECASE
    )

    return sanitized


class IssueFetcher:
    """Retrieves single issue records from Jira.

    Example:
        >>> fetcher = IssueFetcher(HttpxTransport())
        >>> record = await fetcher.fetch("https://acme.atlassian.net/browse/PROJ-7", creds)
        >>> record.key
        'PROJ-7'
    """

    def __init__(self, transport: HttpTransport, max_retries: int = 3):
        """Initialize the fetcher.

        Args:
            transport: HttpTransport used for every request
            max_retries: Retries on HTTP 429 before giving up
        """
        self._transport = transport
        self._max_retries = max_retries

    async def fetch(self, url: str, credentials: Credentials) -> Optional[IssueRecord]:
        """Fetch the issue a placeholder URL points at.

        Every failure is reported as None: a malformed URL, a transport
        failure, a non-2xx status and an unusable body all look the same to
        the caller.

        Args:
            url: Placeholder link URL
            credentials: Jira credentials

        Returns:
            IssueRecord, or None when no record was obtained
        """
        try:
            return await self.get_issue(url, credentials)
        except JiraError as e:
            logger.warning(f"No issue record for {url}: {sanitize_credentials(str(e))}")
            return None

    async def get_issue(self, url: str, credentials: Credentials) -> Optional[IssueRecord]:
        """Fetch the issue a placeholder URL points at, raising on failure.

        Args:
            url: Placeholder link URL
            credentials: Jira credentials

        Returns:
            IssueRecord, or None if the URL is not a Jira browse URL (no
            request is made in that case)

        Raises:
            InvalidCredentialsError: If Jira rejects the credentials (401/403)
            IssueNotFoundError: If the issue does not exist (404)
            APIUnreachableError: If the API cannot be reached
            APIAccessError: On any other non-2xx status or persistent rate limits
            MalformedResponseError: If the body is not JSON or has no key
        """
        ticket_id = parse_ticket_id(url)
        if ticket_id is None:
            logger.debug(f"Skipping non-issue URL: {url}")
            return None

        request_url = ISSUE_ENDPOINT.format(tenant=credentials.tenant, ticket_id=ticket_id)
        headers = {
            'Authorization': f"Basic {basic_auth_token(credentials)}",
            'Content-Type': 'application/json',
        }

        logger.info(f"Fetching issue {ticket_id}")
        response = await retry_on_rate_limit(
            self._request_issue,
            request_url,
            headers,
            max_retries=self._max_retries,
        )

        if not response.ok:
            raise self._translate_status(response, ticket_id, credentials)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(ticket_id, "body is not valid JSON") from e

        return self._parse_issue(payload, ticket_id, credentials)

    async def _request_issue(self, url: str, headers: Dict[str, str]) -> TransportResponse:
        response = await self._transport.request(url=url, method='GET', headers=headers)
        if response.status_code == 429:
            raise RateLimitedError(response.status_code)
        return response

    def _translate_status(
        self,
        response: TransportResponse,
        ticket_id: str,
        credentials: Credentials,
    ) -> JiraError:
        """Translate a non-2xx response to a typed Jira exception."""
        status = response.status_code
        if status in (401, 403):
            return InvalidCredentialsError(
                email=sanitize_credentials(credentials.email),
                endpoint=f"{credentials.tenant}.atlassian.net",
            )
        if status == 404:
            return IssueNotFoundError(ticket_id)

        logger.error(f"Issue request failed: {ticket_id} - HTTP {status}")
        return APIAccessError(f"Jira API failure fetching {ticket_id} (HTTP {status})", status_code=status)

    def _parse_issue(
        self,
        payload: Any,
        ticket_id: str,
        credentials: Credentials,
    ) -> IssueRecord:
        """Build an IssueRecord from a decoded issue body."""
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                ticket_id, f"expected a JSON object, got {type(payload).__name__}"
            )

        key = payload.get('key')
        if not isinstance(key, str) or not key:
            raise MalformedResponseError(ticket_id, "missing 'key'")

        fields = payload.get('fields') or {}
        summary = fields.get('summary') if isinstance(fields, dict) else None
        assignee = fields.get('assignee') if isinstance(fields, dict) else None
        display_name = assignee.get('displayName') if isinstance(assignee, dict) else None

        return IssueRecord(
            key=key,
            summary=summary if isinstance(summary, str) else None,
            assignee=display_name if isinstance(display_name, str) else None,
            url=BROWSE_URL.format(tenant=credentials.tenant, key=key),
        )
