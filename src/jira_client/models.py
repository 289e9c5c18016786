"""Jira issue data model."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IssueRecord:
    """Issue fetched from the Jira REST API.

    Only the fields the enrichment engine renders are kept. The record is
    transient: it is produced by IssueFetcher and consumed by BlockBuilder.

    Attributes:
        key: Tracker-assigned issue key (e.g., "PROJ-123")
        summary: Issue summary text (None if the field was not returned)
        assignee: Assignee display name (None means unassigned)
        url: Canonical browse URL of the issue
    """
    key: str
    summary: Optional[str]
    assignee: Optional[str]
    url: str
