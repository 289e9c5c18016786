"""Fake collaborators for the enrichment engine."""

import json
from typing import Dict, List, Optional, Sequence, Tuple, Union

from src.document.document_store import InMemoryDocumentStore
from src.document.models import InsertAnchor, StoreResult, TextBlockSpec
from src.jira_client.transport import TransportResponse


class FakeTransport:
    """HttpTransport answering from a URL -> response map.

    Values may be a TransportResponse, a dict/list (served as 200 JSON) or
    an exception instance (raised). Unknown URLs answer 404.
    """

    def __init__(self, responses: Optional[Dict[str, Union[TransportResponse, dict, list, Exception]]] = None):
        self.responses = responses or {}
        self.requests: List[Tuple[str, str, Dict[str, str]]] = []

    async def request(self, url: str, method: str, headers: Dict[str, str]) -> TransportResponse:
        self.requests.append((url, method, headers))
        answer = self.responses.get(url)
        if answer is None:
            return TransportResponse(status_code=404, body=b'{"errorMessages": ["Issue does not exist"]}')
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, TransportResponse):
            return answer
        return TransportResponse(status_code=200, body=json.dumps(answer).encode("utf-8"))


class RecordingDocumentStore(InMemoryDocumentStore):
    """InMemoryDocumentStore that logs calls and can be told to fail them."""

    def __init__(self, root=None, fail_insert: bool = False, fail_delete: bool = False):
        super().__init__(root)
        self.fail_insert = fail_insert
        self.fail_delete = fail_delete
        self.calls: List[Tuple[str, object]] = []

    async def insert_blocks(self, blocks: Sequence[TextBlockSpec], anchor: InsertAnchor) -> StoreResult:
        self.calls.append(("insert", (list(blocks), anchor)))
        if self.fail_insert:
            return StoreResult.error("insert rejected")
        return await super().insert_blocks(blocks, anchor)

    async def delete_blocks(self, block_ids: Sequence[str]) -> StoreResult:
        self.calls.append(("delete", list(block_ids)))
        if self.fail_delete:
            return StoreResult.error("delete rejected")
        return await super().delete_blocks(block_ids)

    @property
    def inserts(self) -> List[Tuple[List[TextBlockSpec], InsertAnchor]]:
        return [args for name, args in self.calls if name == "insert"]

    @property
    def deletes(self) -> List[List[str]]:
        return [args for name, args in self.calls if name == "delete"]
