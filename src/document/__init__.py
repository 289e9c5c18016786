"""Document block tree, its JSON format and document stores.

Key classes:
    BlockNode: A block of the document tree
    BlockParser: Converts host JSON to BlockNode trees and back
    DocumentStore: Async protocol the enrichment engine mutates documents through
    InMemoryDocumentStore: DocumentStore over an in-memory tree
    JsonFileDocumentStore: InMemoryDocumentStore backed by a JSON file
"""

from .models import (
    BlockNode,
    BlockStyle,
    InsertAnchor,
    ListStyle,
    NodeKind,
    ReplacementSpec,
    StoreResult,
    StoreStatus,
    TextBlockSpec,
    TextRun,
)
from .errors import (
    DocumentError,
    DocumentNotFoundError,
    DocumentParseError,
    DocumentFilesystemError,
    BlockInsertError,
    PartialReplacementError,
)
from .block_parser import BlockParser
from .document_store import DocumentStore, InMemoryDocumentStore, JsonFileDocumentStore

__all__ = [
    "BlockNode",
    "BlockStyle",
    "InsertAnchor",
    "ListStyle",
    "NodeKind",
    "ReplacementSpec",
    "StoreResult",
    "StoreStatus",
    "TextBlockSpec",
    "TextRun",
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentParseError",
    "DocumentFilesystemError",
    "BlockInsertError",
    "PartialReplacementError",
    "BlockParser",
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
]
