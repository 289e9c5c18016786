"""Traversal of the document tree.

TreeWalker visits every block reachable from a root. Containers are expanded
with an explicit stack rather than recursion, so document depth is bounded
only by memory. Each link placeholder is enriched in its own asyncio task;
all of them run concurrently (up to max_concurrency in flight), so a slow
ticket never holds up the rest of the document.
"""

import asyncio
import logging
from typing import List

from src.document.models import BlockNode, NodeKind

from .enricher import Enricher
from .models import EnrichmentReport

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


class TreeWalker:
    """Finds placeholder blocks and drives their enrichment.

    Example:
        >>> walker = TreeWalker(enricher)
        >>> changed = await walker.visit(root, root.id)
        >>> walker.report.visited
        12
    """

    def __init__(self, enricher: Enricher, max_concurrency: int = DEFAULT_MAX_CONCURRENCY):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self._enricher = enricher
        self._max_concurrency = max_concurrency

    @property
    def report(self) -> EnrichmentReport:
        return self._enricher.report

    async def visit(self, node: BlockNode, document_id: str) -> bool:
        """Visit node and everything below it.

        Args:
            node: Block to start from (usually the document root)
            document_id: Id of the document the block belongs to

        Returns:
            True if at least one placeholder was enriched
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)
        tasks: List[asyncio.Task] = []

        stack = [node]
        while stack:
            current = stack.pop()
            self.report.visited += 1
            kind = current.kind

            if kind is NodeKind.LINK_PLACEHOLDER:
                self.report.placeholders += 1
                tasks.append(asyncio.create_task(
                    self._enrich_safely(current, document_id, semaphore)
                ))
            elif kind is NodeKind.CONTAINER:
                # Snapshot the children: enrichment tasks edit these lists
                stack.extend(reversed(list(current.subblocks or [])))

        logger.debug(
            f"Visited {self.report.visited} block(s), "
            f"{len(tasks)} placeholder(s) queued for enrichment"
        )
        if not tasks:
            return False

        results = await asyncio.gather(*tasks)
        return any(results)

    async def _enrich_safely(self, node: BlockNode, document_id: str, semaphore: asyncio.Semaphore) -> bool:
        async with semaphore:
            try:
                return await self._enricher.enrich(node, document_id)
            except Exception as e:
                logger.exception(f"Unexpected error enriching block {node.id}")
                self.report.record_error(f"Unexpected error enriching block {node.id}: {e}")
                return False
