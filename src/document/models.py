"""Data models for the document block tree.

A document is a tree of blocks. The root is a page block whose subblocks are
the document content in reading order; any block may carry subblocks of its
own. Link placeholder blocks ("urlBlock") hold a bare URL and are the
candidates for enrichment.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Tuple


# Host block type of a bare link
URL_BLOCK_TYPE = "urlBlock"

# Host block type of inserted text blocks
TEXT_BLOCK_TYPE = "textBlock"


class NodeKind(Enum):
    """How the tree walker treats a block."""

    CONTAINER = "container"
    LINK_PLACEHOLDER = "link-placeholder"
    OTHER = "other"


class ListStyle(Enum):
    """List marker shown in front of a block."""

    NONE = "none"
    BULLET = "bullet"
    NUMBERED = "numbered"
    TODO = "todo"
    TOGGLE = "toggle"


class BlockStyle(NamedTuple):
    """Visual style a replacement inherits from the block it replaces."""
    indentation_level: int
    list_style: Optional[ListStyle]


@dataclass(frozen=True)
class TextRun:
    """One inline run of a text block.

    Attributes:
        text: Run text
        is_bold: Render bold
        highlight_color: Host highlight color name (e.g., "cyan")
        link_url: URL the run links to
    """

    text: str
    is_bold: bool = False
    highlight_color: Optional[str] = None
    link_url: Optional[str] = None


@dataclass
class BlockNode:
    """Represents a block in the document tree.

    Attributes:
        id: Block identifier, unique within a document
        type: Host block type ("page", "textBlock", "urlBlock", ...)
        subblocks: Child blocks in reading order (None for leaf blocks)
        url: Link URL (link blocks)
        original_url: URL as originally pasted (link blocks)
        indentation_level: Indentation depth, 0 at the left margin
        list_style: List marker (None if the block has none)
        content: Inline runs (text blocks)
    """

    id: str
    type: str
    subblocks: Optional[List["BlockNode"]] = None
    url: Optional[str] = None
    original_url: Optional[str] = None
    indentation_level: int = 0
    list_style: Optional[ListStyle] = None
    content: List[TextRun] = field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        """Classify the block for traversal."""
        if self.type == URL_BLOCK_TYPE:
            return NodeKind.LINK_PLACEHOLDER
        if self.subblocks is not None:
            return NodeKind.CONTAINER
        return NodeKind.OTHER

    @property
    def link_url(self) -> str:
        """URL of a link block, preferring the URL as originally pasted."""
        return self.original_url or self.url or ""

    @property
    def style(self) -> BlockStyle:
        return BlockStyle(self.indentation_level, self.list_style)

    def get_text_content(self) -> str:
        """Concatenate the text of all inline runs."""
        return "".join(run.text for run in self.content)


@dataclass(frozen=True)
class TextBlockSpec:
    """Description of one text block to insert."""

    content: Tuple[TextRun, ...]
    indentation_level: int = 0
    list_style: Optional[ListStyle] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.content)


@dataclass(frozen=True)
class InsertAnchor:
    """Insertion point: immediately after a block of a document."""

    document_id: str
    after_block_id: str


@dataclass(frozen=True)
class ReplacementSpec:
    """New blocks for one placeholder and where they go.

    Attributes:
        blocks: Blocks to insert, in order (title block, then assignee block)
        anchor: Insertion point right after the placeholder
        target_block_id: The placeholder, deleted once the blocks are inserted
    """

    blocks: Tuple[TextBlockSpec, ...]
    anchor: InsertAnchor
    target_block_id: str

    @property
    def title_block(self) -> TextBlockSpec:
        return self.blocks[0]

    @property
    def assignee_block(self) -> TextBlockSpec:
        return self.blocks[1]


class StoreStatus(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StoreResult:
    """Outcome of one document store call.

    Attributes:
        status: Whether the call took effect
        data: Call-specific payload (root block, inserted block ids, ...)
        message: Failure description when status is ERROR
    """

    status: StoreStatus
    data: Any = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.SUCCESS

    @classmethod
    def success(cls, data: Any = None) -> "StoreResult":
        return cls(StoreStatus.SUCCESS, data=data)

    @classmethod
    def error(cls, message: str) -> "StoreResult":
        return cls(StoreStatus.ERROR, message=message)
