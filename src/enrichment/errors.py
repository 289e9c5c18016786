"""Exceptions raised by the enrichment entry point."""

from src.jira_client.errors import EnrichError


class EnrichmentError(EnrichError):
    """Base exception for enrichment run errors."""
    pass


class EnrichmentInProgressError(EnrichmentError):
    """Raised when a run is started while another one is still in flight."""

    def __init__(self, document_id: str = "current document"):
        super().__init__(f"Enrichment already in progress for {document_id}")
        self.document_id = document_id
