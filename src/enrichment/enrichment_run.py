"""Entry point for enriching the current document.

EnrichmentRun ties the pieces together for one walk: it reads the current
document, builds the fetcher, enricher and walker for the given credentials
and exposes the caller-visible state (an in-progress flag and the last
error message).
"""

import logging
from typing import Optional

from src.document.document_store import DocumentStore
from src.document.errors import DocumentNotFoundError
from src.document.models import BlockNode
from src.jira_client.auth import Credentials
from src.jira_client.issue_fetcher import IssueFetcher
from src.jira_client.transport import HttpTransport

from .enricher import Enricher
from .errors import EnrichmentInProgressError
from .models import EnrichmentReport
from .tree_walker import DEFAULT_MAX_CONCURRENCY, TreeWalker

logger = logging.getLogger(__name__)


class EnrichmentRun:
    """Enriches every Jira link of the current document.

    A run cannot be cancelled once started. Per-block failures end up in the
    returned report; only a missing document aborts the run.

    Example:
        >>> run = EnrichmentRun(store, HttpxTransport())
        >>> report = await run.run(Credentials("acme", "ann@acme.io", "token"))
        >>> print(f"Enriched {report.enriched} of {report.placeholders} links")
    """

    def __init__(
        self,
        store: DocumentStore,
        transport: HttpTransport,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        max_retries: int = 3,
    ):
        self._store = store
        self._transport = transport
        self._max_concurrency = max_concurrency
        self._max_retries = max_retries
        self.in_progress = False
        self.last_error: Optional[str] = None

    async def run(self, credentials: Credentials) -> EnrichmentReport:
        """Walk the current document and enrich its Jira links.

        Args:
            credentials: Jira tenant, e-mail and API key for this walk

        Returns:
            EnrichmentReport for the walk

        Raises:
            EnrichmentInProgressError: If a run is already in flight
            DocumentNotFoundError: If the store has no current document
        """
        if self.in_progress:
            raise EnrichmentInProgressError()

        self.in_progress = True
        self.last_error = None
        try:
            root = await self._load_document()

            report = EnrichmentReport(document_id=root.id)
            fetcher = IssueFetcher(self._transport, max_retries=self._max_retries)
            enricher = Enricher(fetcher, self._store, credentials, report)
            walker = TreeWalker(enricher, max_concurrency=self._max_concurrency)

            logger.info(f"Enriching document {root.id}")
            await walker.visit(root, root.id)

            self.last_error = report.last_error
            logger.info(
                f"Enrichment finished: {report.enriched} enriched, "
                f"{report.failed} failed, {report.skipped} skipped"
            )
            return report
        finally:
            self.in_progress = False

    async def _load_document(self) -> BlockNode:
        result = await self._store.get_current_document()
        if not result.ok or result.data is None:
            error = DocumentNotFoundError(result.message)
            self.last_error = str(error)
            logger.error(str(error))
            raise error
        return result.data
