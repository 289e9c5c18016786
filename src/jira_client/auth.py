"""Authentication module for loading Jira credentials.

This module handles loading Jira Cloud credentials from environment variables
using python-dotenv, and building the HTTP Basic credential Jira expects.
Credentials are never validated beyond presence: the tenant, e-mail and API
key are opaque values that only end up in the request URL and auth header.
"""

import base64
import os
import re
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Jira API credentials."""
    tenant: str
    email: str
    api_key: str


def basic_auth_token(credentials: Credentials) -> str:
    """Return base64(email:api_key) for an HTTP Basic Authorization header.

    Example:
        >>> basic_auth_token(Credentials("acme", "ann@acme.io", "secret"))
        'YW5uQGFjbWUuaW86c2VjcmV0'
    """
    raw = f"{credentials.email}:{credentials.api_key}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def normalize_tenant(tenant: str) -> str:
    """Reduce a tenant given as a site URL to its bare tenant name.

    Accepts "acme", "acme.atlassian.net" and "https://acme.atlassian.net/"
    and returns "acme" for all of them. Anything else is returned stripped.
    """
    value = tenant.strip()
    value = re.sub(r'^https?://', '', value)
    value = value.split('/', 1)[0]
    if value.endswith('.atlassian.net'):
        value = value[:-len('.atlassian.net')]
    return value


class Authenticator:
    """Loads and validates Jira credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Required environment variables:
        JIRA_TENANT: Jira Cloud tenant (the "acme" in acme.atlassian.net)
        JIRA_EMAIL: Account e-mail address
        JIRA_API_KEY: Jira API token

    Raises:
        InvalidCredentialsError: If any required credential is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.tenant}.atlassian.net")
    """

    def __init__(self, tenant_override: Optional[str] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            tenant_override: Tenant to use instead of JIRA_TENANT (from CLI or config)
        """
        load_dotenv()
        self._tenant_override = tenant_override

    def get_credentials(self) -> Credentials:
        """Get Jira credentials from environment variables.

        Returns:
            Credentials: A named tuple containing tenant, email and api_key

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        tenant = self._tenant_override or os.getenv('JIRA_TENANT')
        email = os.getenv('JIRA_EMAIL')
        api_key = os.getenv('JIRA_API_KEY')

        missing = []
        if not tenant:
            missing.append('JIRA_TENANT')
        if not email:
            missing.append('JIRA_EMAIL')
        if not api_key:
            missing.append('JIRA_API_KEY')

        if missing:
            endpoint = f"{normalize_tenant(tenant)}.atlassian.net" if tenant else "unknown"
            raise InvalidCredentialsError(
                email=email if email else "unknown",
                endpoint=endpoint
            )

        # Type checker: these are guaranteed to be str due to validation above
        return Credentials(
            tenant=normalize_tenant(tenant),  # type: ignore[arg-type]
            email=email,  # type: ignore[arg-type]
            api_key=api_key,  # type: ignore[arg-type]
        )
