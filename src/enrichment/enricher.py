"""Replacing one placeholder block with its issue blocks.

The replacement is two separate store calls, insert then delete, and is not
transactional. If the insert succeeds and the delete fails, the document
keeps both the placeholder and the new blocks; that state is reported, never
retried or rolled back.
"""

import logging
from typing import Optional

from src.document.document_store import DocumentStore
from src.document.errors import BlockInsertError, PartialReplacementError
from src.document.models import BlockNode
from src.jira_client.auth import Credentials
from src.jira_client.errors import EnrichError
from src.jira_client.issue_fetcher import IssueFetcher, sanitize_credentials

from .block_builder import BlockBuilder
from .models import EnrichmentReport

logger = logging.getLogger(__name__)


class Enricher:
    """Runs fetch, build, insert, delete for a single placeholder.

    Failures are contained here: a fetch or mutation error is logged,
    recorded on the shared report and turned into a False return value.

    Example:
        >>> enricher = Enricher(fetcher, store, credentials, report)
        >>> applied = await enricher.enrich(placeholder, document_id="page-1")
    """

    def __init__(
        self,
        fetcher: IssueFetcher,
        store: DocumentStore,
        credentials: Credentials,
        report: EnrichmentReport,
        builder: Optional[BlockBuilder] = None,
    ):
        self._fetcher = fetcher
        self._store = store
        self._credentials = credentials
        self.report = report
        self._builder = builder or BlockBuilder()

    async def enrich(self, placeholder: BlockNode, document_id: str) -> bool:
        """Replace a placeholder with the blocks built from its issue.

        Args:
            placeholder: Link block to replace
            document_id: Id of the document holding the block

        Returns:
            True once both the insert and the delete call have been issued,
            False if the placeholder was left untouched
        """
        url = placeholder.link_url
        try:
            issue = await self._fetcher.get_issue(url, self._credentials)
        except EnrichError as e:
            self._record_failure(placeholder, e)
            return False

        if issue is None:
            self.report.skipped += 1
            return False

        spec = self._builder.build(issue, placeholder, document_id)

        inserted = await self._store.insert_blocks(spec.blocks, spec.anchor)
        if not inserted.ok:
            self._record_failure(placeholder, BlockInsertError(placeholder.id, inserted.message))
            return False

        deleted = await self._store.delete_blocks([spec.target_block_id])
        if not deleted.ok:
            self.report.partial += 1
            self._record_failure(placeholder, PartialReplacementError(placeholder.id, deleted.message))
            return True

        self.report.enriched += 1
        logger.info(f"Replaced block {placeholder.id} with issue {issue.key}")
        return True

    def _record_failure(self, placeholder: BlockNode, error: Exception) -> None:
        message = sanitize_credentials(str(error))
        logger.error(f"Enrichment failed for block {placeholder.id}: {message}")
        self.report.record_error(message)
