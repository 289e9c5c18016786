"""Parser for host block documents.

This module converts the JSON block tree exported by the host editor into
BlockNode objects and back. The format mirrors the host's block API:

    {
        "id": "page-1",
        "type": "page",
        "subblocks": [
            {
                "id": "b1",
                "type": "urlBlock",
                "url": "https://acme.atlassian.net/browse/PROJ-7",
                "originalUrl": "https://acme.atlassian.net/browse/PROJ-7",
                "indentationLevel": 0,
                "listStyle": {"type": "bullet"}
            }
        ]
    }
"""

import json
import logging
from typing import Any, Dict, List, Optional

from .errors import DocumentParseError
from .models import BlockNode, ListStyle, TextBlockSpec, TextRun, TEXT_BLOCK_TYPE

logger = logging.getLogger(__name__)


class BlockParser:
    """Converts between host JSON and BlockNode trees.

    Parsing walks the tree with an explicit stack, so arbitrarily deep
    documents do not hit the interpreter recursion limit.
    """

    def parse_document(self, data: Dict[str, Any]) -> BlockNode:
        """Parse a host JSON document into a BlockNode tree.

        Args:
            data: The document as a dictionary (parsed JSON)

        Returns:
            Root BlockNode

        Raises:
            DocumentParseError: If the data is not a block tree or ids repeat
        """
        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Document must be a JSON object, got {type(data).__name__}"
            )

        seen_ids = set()
        root = self._parse_block(data, seen_ids)
        stack = [(root, data)]

        while stack:
            node, node_data = stack.pop()
            children_data = node_data.get("subblocks")
            if children_data is None:
                continue
            if not isinstance(children_data, list):
                raise DocumentParseError("'subblocks' must be a list", node.id)

            node.subblocks = []
            for child_data in children_data:
                child = self._parse_block(child_data, seen_ids)
                node.subblocks.append(child)
                stack.append((child, child_data))

        logger.debug(f"Parsed document {root.id} with {len(seen_ids)} block(s)")
        return root

    def parse_from_string(self, document_string: str) -> BlockNode:
        """Parse a host JSON string into a BlockNode tree.

        Raises:
            DocumentParseError: If the string is not valid JSON or not a block tree
        """
        try:
            data = json.loads(document_string)
        except json.JSONDecodeError as e:
            raise DocumentParseError(f"Invalid JSON: {e}") from e
        return self.parse_document(data)

    def _parse_block(self, data: Any, seen_ids: set) -> BlockNode:
        """Parse one block's own fields (subblocks are handled by the caller)."""
        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Block must be a JSON object, got {type(data).__name__}"
            )

        block_id = data.get("id")
        if not isinstance(block_id, str) or not block_id:
            raise DocumentParseError("Block is missing a string 'id'")
        if block_id in seen_ids:
            raise DocumentParseError("Duplicate block id", block_id)
        seen_ids.add(block_id)

        indentation = data.get("indentationLevel", 0)
        if not isinstance(indentation, int) or isinstance(indentation, bool) or indentation < 0:
            raise DocumentParseError(
                f"'indentationLevel' must be a non-negative integer, got {indentation!r}",
                block_id,
            )

        return BlockNode(
            id=block_id,
            type=str(data.get("type", "unknown")),
            url=data.get("url"),
            original_url=data.get("originalUrl"),
            indentation_level=indentation,
            list_style=self._parse_list_style(data.get("listStyle"), block_id),
            content=self._parse_content(data.get("content"), block_id),
        )

    def _parse_list_style(self, value: Any, block_id: str) -> Optional[ListStyle]:
        # The host sends either {"type": "bullet"} or a bare string
        if isinstance(value, dict):
            value = value.get("type")
        if value is None:
            return None
        try:
            return ListStyle(value)
        except ValueError:
            logger.warning(f"Unknown list style {value!r} on block {block_id}, ignoring")
            return None

    def _parse_content(self, value: Any, block_id: str) -> List[TextRun]:
        if value is None:
            return []
        if isinstance(value, str):
            return [TextRun(text=value)]
        if not isinstance(value, list):
            raise DocumentParseError("'content' must be a string or a list", block_id)

        runs = []
        for run_data in value:
            if not isinstance(run_data, dict):
                continue
            link = run_data.get("link")
            runs.append(TextRun(
                text=str(run_data.get("text", "")),
                is_bold=bool(run_data.get("isBold", False)),
                highlight_color=run_data.get("highlightColor"),
                link_url=link.get("url") if isinstance(link, dict) else None,
            ))
        return runs

    def to_dict(self, root: BlockNode) -> Dict[str, Any]:
        """Serialize a BlockNode tree back to host JSON.

        Args:
            root: Root block

        Returns:
            Document as a dictionary, ready for json.dumps
        """
        root_data = self._block_to_dict(root)
        stack = [(root, root_data)]

        while stack:
            node, node_data = stack.pop()
            if node.subblocks is None:
                continue
            children_data = []
            for child in node.subblocks:
                child_data = self._block_to_dict(child)
                children_data.append(child_data)
                stack.append((child, child_data))
            node_data["subblocks"] = children_data

        return root_data

    def to_string(self, root: BlockNode) -> str:
        """Serialize a BlockNode tree to an indented JSON string."""
        return json.dumps(self.to_dict(root), indent=2, ensure_ascii=False)

    def _block_to_dict(self, node: BlockNode) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": node.id, "type": node.type}
        if node.url is not None:
            data["url"] = node.url
        if node.original_url is not None:
            data["originalUrl"] = node.original_url
        data["indentationLevel"] = node.indentation_level
        if node.list_style is not None:
            data["listStyle"] = {"type": node.list_style.value}
        if node.content:
            data["content"] = [run_to_dict(run) for run in node.content]
        return data


def run_to_dict(run: TextRun) -> Dict[str, Any]:
    """Serialize one inline run to host JSON."""
    data: Dict[str, Any] = {"text": run.text}
    if run.is_bold:
        data["isBold"] = True
    if run.highlight_color:
        data["highlightColor"] = run.highlight_color
    if run.link_url:
        data["link"] = {"type": "url", "url": run.link_url}
    return data


def block_from_spec(block_id: str, spec: TextBlockSpec) -> BlockNode:
    """Materialize an inserted text block."""
    return BlockNode(
        id=block_id,
        type=TEXT_BLOCK_TYPE,
        indentation_level=spec.indentation_level,
        list_style=spec.list_style,
        content=list(spec.content),
    )
