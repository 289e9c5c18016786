"""Test fixtures for enrichment tests.

This module provides sample block documents and Jira issue payloads.
"""

from .sample_documents import (
    ISSUE_URL,
    ISSUE_PAYLOAD,
    UNASSIGNED_ISSUE_PAYLOAD,
    SAMPLE_DOCUMENT_JSON,
)

__all__ = [
    'ISSUE_URL',
    'ISSUE_PAYLOAD',
    'UNASSIGNED_ISSUE_PAYLOAD',
    'SAMPLE_DOCUMENT_JSON',
]
