"""Typed exception hierarchy for document store errors.

All exceptions inherit from DocumentError and carry the identifiers of the
blocks involved so that a failed replacement can be located in the document.
"""

from typing import Optional

from src.jira_client.errors import EnrichError


class DocumentError(EnrichError):
    """Base exception for all document-related errors."""
    pass


class DocumentNotFoundError(DocumentError):
    """Raised when no current document is available."""

    def __init__(self, reason: Optional[str] = None):
        message = "No current document available"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.reason = reason


class DocumentParseError(DocumentError):
    """Raised when a document file does not describe a block tree."""

    def __init__(self, message: str, block_id: Optional[str] = None):
        if block_id:
            full_message = f"Invalid block '{block_id}': {message}"
        else:
            full_message = f"Invalid document: {message}"
        super().__init__(full_message)
        self.block_id = block_id
        self.original_message = message


class DocumentFilesystemError(DocumentError):
    """Raised when a document file cannot be read or written."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Document file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class BlockInsertError(DocumentError):
    """Raised when replacement blocks could not be inserted."""

    def __init__(self, after_block_id: str, reason: Optional[str] = None):
        message = f"Failed to insert blocks after {after_block_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.after_block_id = after_block_id
        self.reason = reason


class PartialReplacementError(DocumentError):
    """Raised when new blocks were inserted but the original was not deleted.

    The document then holds both the placeholder and its replacement.
    """

    def __init__(self, block_id: str, reason: Optional[str] = None):
        message = f"Inserted replacement but failed to delete block {block_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.block_id = block_id
        self.reason = reason
