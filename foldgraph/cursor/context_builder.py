# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Context Builder - source text of the block around the cursor

Ancestors here are raw parse-tree parents, independent of the heading and
list semantics of the containment pass.
"""
import logging
from typing import List, Optional

from foldgraph.config import CursorConfig
from foldgraph.cursor.position_finder import CursorPosition
from foldgraph.domain_models import SyntaxNode

logger = logging.getLogger(__name__)


def find_ancestors(tree: SyntaxNode, target: SyntaxNode) -> Optional[List[SyntaxNode]]:
    """Get the root-to-parent path of a node

    Returns:
        Ancestors ordered from the root down ([] for the root itself),
        or None if target is not part of the tree
    """
    stack = [(tree, [])]
    while stack:
        node, path = stack.pop()
        if node is target:
            return path
        child_path = path + [node]
        for child in reversed(node.children):
            stack.append((child, child_path))
    return None


def content_from_node(node: SyntaxNode, markdown_content: str) -> str:
    """Get the source lines covered by a node (inclusive)"""
    if node.position is None:
        return ''
    lines = markdown_content.split('\n')
    return '\n'.join(lines[node.position.start.line - 1:node.position.end.line])


def find_top_level_ancestor(tree: SyntaxNode, target: Optional[SyntaxNode]) -> Optional[SyntaxNode]:
    """Get the direct child of the root that contains target

    Returns:
        target itself when it is top-level, None for the root or a node
        outside the tree
    """
    if target is None:
        return None
    ancestors = find_ancestors(tree, target)
    if not ancestors:
        return None
    if len(ancestors) == 1:
        return target
    return ancestors[1]


def build_context(tree: SyntaxNode, node_at_cursor: Optional[SyntaxNode],
                  markdown_content: str) -> str:
    """Get the source text of the top-level block around a node

    Args:
        tree: Parsed document
        node_at_cursor: Node found under the cursor
        markdown_content: Raw text the tree was parsed from

    Returns:
        Whole document for the root, the node's own lines for a top-level
        node, otherwise the lines of its top-level ancestor. Empty string
        when there is no node or it carries no span.
    """
    if node_at_cursor is None or node_at_cursor.position is None:
        return ''

    ancestors = find_ancestors(tree, node_at_cursor)
    if ancestors is None:
        logger.warning(f"{node_at_cursor!r} is not part of the tree; using the whole document")
        return markdown_content

    if len(ancestors) == 0:
        return markdown_content

    if len(ancestors) == 1:
        return content_from_node(node_at_cursor, markdown_content)

    return content_from_node(ancestors[1], markdown_content)


def add_cursor_marker(position: CursorPosition, markdown_content: str,
                      config: Optional[CursorConfig] = None) -> str:
    """Insert the cursor marker at an editor position (clamped to the text)"""
    marker = (config or CursorConfig()).marker
    lines = markdown_content.split('\n')
    line = max(0, min(position.line, len(lines) - 1))
    ch = max(0, min(position.ch, len(lines[line])))

    lines[line] = lines[line][:ch] + marker + lines[line][ch:]
    return '\n'.join(lines)


def remove_cursor_marker(markdown_content: str,
                         config: Optional[CursorConfig] = None) -> str:
    """Strip every cursor marker from text"""
    marker = (config or CursorConfig()).marker
    return markdown_content.replace(marker, '')
