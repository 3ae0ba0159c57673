"""Test package for foldgraph

Shared test utilities for building and searching syntax trees.
"""
from typing import Iterable, List, Optional

from foldgraph.domain_models import NodeKind, Point, Span, SyntaxNode


def make_span(start_line: int, start_column: int, end_line: int, end_column: int) -> Span:
    """Build a span without offsets"""
    return Span(Point(start_line, start_column), Point(end_line, end_column))


def make_node(node_type: str, *children: SyntaxNode,
              span: Optional[Span] = None, **fields) -> SyntaxNode:
    """Build a syntax node by hand"""
    return SyntaxNode(node_type, children=list(children), position=span, **fields)


def text(value: str, span: Optional[Span] = None) -> SyntaxNode:
    return SyntaxNode(NodeKind.TEXT, value=value, position=span)


def heading(depth: Optional[int], title: str = '', span: Optional[Span] = None) -> SyntaxNode:
    return SyntaxNode(NodeKind.HEADING, children=[text(title)] if title else [],
                      depth=depth, position=span)


def paragraph(value: str = '', span: Optional[Span] = None) -> SyntaxNode:
    return SyntaxNode(NodeKind.PARAGRAPH, children=[text(value)] if value else [],
                      position=span)


def find_heading(tree: SyntaxNode, depth: int, title: str) -> Optional[SyntaxNode]:
    """Find a heading by depth and exact text"""
    for node in tree.walk():
        if node.type == NodeKind.HEADING and node.depth == depth \
                and node.text_content() == title:
            return node
    return None


def find_node_of_type(tree: SyntaxNode, node_type: str) -> Optional[SyntaxNode]:
    """Find the first node of a type in pre-order"""
    for node in tree.walk():
        if node.type == node_type:
            return node
    return None


def find_all(tree: SyntaxNode, node_type: str) -> List[SyntaxNode]:
    return [node for node in tree.walk() if node.type == node_type]


def find_paragraph(tree: SyntaxNode, phrase: str) -> Optional[SyntaxNode]:
    """Find the first paragraph whose text contains phrase"""
    for node in find_all(tree, NodeKind.PARAGRAPH):
        if phrase in node.text_content():
            return node
    return None


def find_list_item(tree: SyntaxNode, phrase: str) -> Optional[SyntaxNode]:
    """Find the innermost list item whose own paragraph contains phrase"""
    for item in find_all(tree, NodeKind.LIST_ITEM):
        first = item.children[0] if item.children else None
        if first is not None and first.type == NodeKind.PARAGRAPH \
                and phrase in first.text_content():
            return item
    return None


def contains_node(nodes: Iterable[SyntaxNode], target: SyntaxNode) -> bool:
    """Identity membership check"""
    return any(node is target for node in nodes)
