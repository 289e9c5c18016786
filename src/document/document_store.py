"""Document store interface and local implementations.

The enrichment engine reaches the document only through the DocumentStore
protocol. Every call is a coroutine and reports its outcome as a
StoreResult instead of raising, so the engine must check the status before
assuming a call took effect.

InMemoryDocumentStore keeps the tree in memory and re-resolves block ids on
every call; JsonFileDocumentStore adds loading from and saving to a JSON file.
"""

import asyncio
import logging
import os
import shutil
import tempfile
import uuid
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from .block_parser import BlockParser, block_from_spec
from .errors import DocumentFilesystemError
from .models import BlockNode, InsertAnchor, StoreResult, TextBlockSpec

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Async access to the current document."""

    async def get_current_document(self) -> StoreResult:
        """Return the root BlockNode as result data."""
        ...

    async def insert_blocks(self, blocks: Sequence[TextBlockSpec], anchor: InsertAnchor) -> StoreResult:
        """Insert blocks right after anchor.after_block_id; data is the new ids."""
        ...

    async def delete_blocks(self, block_ids: Sequence[str]) -> StoreResult:
        """Delete blocks by id."""
        ...


class InMemoryDocumentStore:
    """DocumentStore over a BlockNode tree held in memory.

    Block references are never cached: each call searches the current tree
    for the ids it is given, so concurrent insertions and deletions made by
    other tasks are always observed.

    Example:
        >>> store = InMemoryDocumentStore(root)
        >>> result = await store.get_current_document()
        >>> result.data is root
        True
    """

    def __init__(self, root: Optional[BlockNode] = None):
        self.root = root

    async def get_current_document(self) -> StoreResult:
        await asyncio.sleep(0)
        if self.root is None:
            return StoreResult.error("No document is open")
        return StoreResult.success(self.root)

    async def insert_blocks(self, blocks: Sequence[TextBlockSpec], anchor: InsertAnchor) -> StoreResult:
        await asyncio.sleep(0)
        if self.root is None:
            return StoreResult.error("No document is open")
        if anchor.document_id != self.root.id:
            return StoreResult.error(f"Unknown document {anchor.document_id}")

        located = self._locate(anchor.after_block_id)
        if located is None:
            return StoreResult.error(f"Block {anchor.after_block_id} not found")
        parent, index = located
        if parent is None:
            return StoreResult.error("Cannot insert after the document root")

        new_nodes = [block_from_spec(self._new_block_id(), spec) for spec in blocks]
        parent.subblocks[index + 1:index + 1] = new_nodes

        new_ids = [node.id for node in new_nodes]
        logger.debug(f"Inserted {len(new_ids)} block(s) after {anchor.after_block_id}")
        return StoreResult.success(new_ids)

    async def delete_blocks(self, block_ids: Sequence[str]) -> StoreResult:
        await asyncio.sleep(0)
        if self.root is None:
            return StoreResult.error("No document is open")

        missing = [block_id for block_id in block_ids if self._locate(block_id) is None]
        if missing:
            return StoreResult.error(f"Block(s) not found: {', '.join(missing)}")
        if self.root.id in block_ids:
            return StoreResult.error("Cannot delete the document root")

        for block_id in dict.fromkeys(block_ids):
            parent, index = self._locate(block_id)  # type: ignore[misc]
            del parent.subblocks[index]

        logger.debug(f"Deleted block(s): {', '.join(block_ids)}")
        return StoreResult.success(list(block_ids))

    def find_block(self, block_id: str) -> Optional[BlockNode]:
        """Return the block with the given id, or None."""
        located = self._locate(block_id)
        if located is None:
            return None
        parent, index = located
        if parent is None:
            return self.root
        return parent.subblocks[index]

    def iter_blocks(self) -> Iterable[BlockNode]:
        """Yield every block in reading order."""
        if self.root is None:
            return
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if node.subblocks:
                stack.extend(reversed(node.subblocks))

    def _locate(self, block_id: str) -> Optional[Tuple[Optional[BlockNode], int]]:
        """Find (parent, index) of a block; parent is None for the root."""
        if self.root is None:
            return None
        if self.root.id == block_id:
            return None, 0

        stack: List[BlockNode] = [self.root]
        while stack:
            node = stack.pop()
            for index, child in enumerate(node.subblocks or []):
                if child.id == block_id:
                    return node, index
                if child.subblocks:
                    stack.append(child)
        return None

    def _new_block_id(self) -> str:
        return str(uuid.uuid4()).upper()


class JsonFileDocumentStore(InMemoryDocumentStore):
    """InMemoryDocumentStore loaded from and saved to a host JSON file.

    Example:
        >>> store = JsonFileDocumentStore("notes.json")
        >>> store.load()
        >>> # ... run enrichment ...
        >>> store.save()
    """

    def __init__(self, path: str, parser: Optional[BlockParser] = None):
        super().__init__()
        self.path = path
        self._parser = parser or BlockParser()

    def load(self) -> BlockNode:
        """Read and parse the document file.

        Raises:
            DocumentFilesystemError: If the file cannot be read
            DocumentParseError: If the file is not a valid block document
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise DocumentFilesystemError(self.path, 'read', 'File not found')
        except PermissionError:
            raise DocumentFilesystemError(self.path, 'read', 'Permission denied')
        except OSError as e:
            raise DocumentFilesystemError(self.path, 'read', str(e))

        self.root = self._parser.parse_from_string(content)
        logger.info(f"Loaded document {self.root.id} from {self.path}")
        return self.root

    def save(self, path: Optional[str] = None) -> str:
        """Write the current tree to path (defaults to the file it was loaded from).

        The document is encoded first, staged in a temporary file next to the
        target and moved over it, so a failed save leaves the target as it was.

        Returns:
            The path written

        Raises:
            DocumentFilesystemError: If nothing is loaded or the file cannot be written
        """
        target = path or self.path
        if self.root is None:
            raise DocumentFilesystemError(target, 'write', 'No document loaded')

        try:
            payload = (self._parser.to_string(self.root) + "\n").encode('utf-8')
        except UnicodeEncodeError as e:
            raise DocumentFilesystemError(target, 'write', f"Cannot encode document: {e}")

        directory = os.path.dirname(target)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise DocumentFilesystemError(directory, 'create_directory', str(e))

        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=directory or '.',
                prefix=f".{os.path.basename(target)}.",
                suffix='.tmp',
            )
            with os.fdopen(fd, 'wb') as f:
                f.write(payload)
            if os.path.exists(target):
                shutil.copymode(target, temp_path)
            os.replace(temp_path, target)
            temp_path = None
        except PermissionError:
            raise DocumentFilesystemError(target, 'write', 'Permission denied')
        except OSError as e:
            raise DocumentFilesystemError(target, 'write', str(e))
        finally:
            if temp_path is not None:
                self._remove_temp_file(temp_path)

        logger.info(f"Saved document {self.root.id} to {target}")
        return target

    def _remove_temp_file(self, temp_path: str) -> None:
        try:
            if os.path.exists(temp_path):
                os.remove(temp_path)
        except OSError as e:
            logger.warning(f"Failed to remove temp file {temp_path}: {e}")
