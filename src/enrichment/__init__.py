"""Enrichment engine: finds Jira links in a document and replaces them.

Key classes:
    EnrichmentRun: Entry point for one walk over the current document
    TreeWalker: Visits every block and fans out over placeholders
    Enricher: Fetch, build, insert, delete for one placeholder
    BlockBuilder: Pure IssueRecord -> ReplacementSpec transformation
    EnrichmentReport: Counters and last error of a walk
"""

from .models import EnrichmentReport
from .errors import EnrichmentError, EnrichmentInProgressError
from .block_builder import BlockBuilder
from .enricher import Enricher
from .tree_walker import TreeWalker
from .enrichment_run import EnrichmentRun

__all__ = [
    "EnrichmentReport",
    "EnrichmentError",
    "EnrichmentInProgressError",
    "BlockBuilder",
    "Enricher",
    "TreeWalker",
    "EnrichmentRun",
]
