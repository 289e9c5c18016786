"""Data models for enrichment runs."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EnrichmentReport:
    """Counters and the single error surface of one walk.

    All tasks of a walk share one report. Errors do not accumulate: the last
    recorded message wins, and `failed` counts how many blocks hit one.

    Attributes:
        document_id: Root block id of the walked document
        visited: Blocks visited by the tree walker
        placeholders: Link placeholder blocks found
        enriched: Placeholders fully replaced (insert and delete succeeded)
        skipped: Placeholders whose URL is not a Jira issue URL
        failed: Placeholders whose fetch or mutation failed
        partial: Placeholders left next to their inserted replacement
        last_error: Message of the most recent failure

    Example:
        >>> report = EnrichmentReport(document_id="page-1")
        >>> report.record_error("Issue PROJ-9 not found")
        >>> report.last_error
        'Issue PROJ-9 not found'
    """
    document_id: Optional[str] = None
    visited: int = 0
    placeholders: int = 0
    enriched: int = 0
    skipped: int = 0
    failed: int = 0
    partial: int = 0
    last_error: Optional[str] = None

    def record_error(self, message: str) -> None:
        self.failed += 1
        self.last_error = message

    @property
    def has_errors(self) -> bool:
        return self.failed > 0
