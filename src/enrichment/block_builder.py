"""Replacement blocks for an enriched issue link.

BlockBuilder is a pure transformation: given an IssueRecord and the
placeholder it came from, it returns the ReplacementSpec that the enricher
applies. The output format is fixed:

    PROJ-7 - Fix bug            <- title block, placeholder's indentation/list style
        Assignee: Ann           <- assignee block, one level deeper
"""

from src.document.models import (
    BlockNode,
    BlockStyle,
    InsertAnchor,
    ReplacementSpec,
    TextBlockSpec,
    TextRun,
)
from src.jira_client.models import IssueRecord

ISSUE_KEY_HIGHLIGHT_COLOR = 'cyan'
ISSUE_ASSIGNEE_COLOR = 'sunsetGradient'

TITLE_SEPARATOR = ' - '
ASSIGNEE_LABEL = 'Assignee: '

# Shown when Jira returns no summary / no assignee
SUMMARY_FALLBACK = '{Summary}'
ASSIGNEE_FALLBACK = '{Assignee}'


class BlockBuilder:
    """Builds the title and assignee blocks that replace a placeholder."""

    def build(self, issue: IssueRecord, placeholder: BlockNode, document_id: str) -> ReplacementSpec:
        """Build the replacement for one placeholder.

        Args:
            issue: Issue fetched for the placeholder
            placeholder: The link block being replaced
            document_id: Id of the document holding the placeholder

        Returns:
            ReplacementSpec with the title block then the assignee block,
            anchored right after the placeholder
        """
        style = placeholder.style
        link_url = placeholder.link_url or issue.url

        return ReplacementSpec(
            blocks=(
                self.create_issue_title_block(issue, style, link_url),
                self.create_assignee_block(issue, style),
            ),
            anchor=InsertAnchor(document_id=document_id, after_block_id=placeholder.id),
            target_block_id=placeholder.id,
        )

    def create_issue_title_block(self, issue: IssueRecord, style: BlockStyle, link_url: str) -> TextBlockSpec:
        return TextBlockSpec(
            content=(
                TextRun(
                    text=issue.key,
                    is_bold=True,
                    highlight_color=ISSUE_KEY_HIGHLIGHT_COLOR,
                    link_url=link_url,
                ),
                TextRun(text=TITLE_SEPARATOR),
                TextRun(text=issue.summary if issue.summary is not None else SUMMARY_FALLBACK),
            ),
            indentation_level=style.indentation_level,
            list_style=style.list_style,
        )

    def create_assignee_block(self, issue: IssueRecord, style: BlockStyle) -> TextBlockSpec:
        return TextBlockSpec(
            content=(
                TextRun(text=ASSIGNEE_LABEL, is_bold=False),
                TextRun(
                    text=issue.assignee if issue.assignee is not None else ASSIGNEE_FALLBACK,
                    is_bold=True,
                    highlight_color=ISSUE_ASSIGNEE_COLOR,
                ),
            ),
            indentation_level=style.indentation_level + 1,
        )
