# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Position Finder - most specific syntax node under an editor cursor"""
from dataclasses import dataclass
from typing import Optional

from foldgraph.config import CursorConfig
from foldgraph.domain_models import Span, SyntaxNode


@dataclass(frozen=True)
class CursorPosition:
    """Editor cursor location (0-based line and character offset)"""
    line: int
    ch: int


def span_area(span: Span, multiline_weight: int = 1000) -> int:
    """Score a span's size; smaller means more specific

    Multi-line spans are weighted so that any of them scores larger than
    any single-line span.
    """
    column_span = span.end.column - span.start.column
    if span.is_multiline:
        return (span.end.line - span.start.line) * multiline_weight + column_span
    return column_span


def find_node_at_position(tree: SyntaxNode, position: CursorPosition,
                          config: Optional[CursorConfig] = None) -> Optional[SyntaxNode]:
    """Find the smallest node whose span covers the cursor

    Args:
        tree: Parsed document
        position: 0-based editor cursor

    Returns:
        The covering node with the smallest area (first found in pre-order
        on ties), or None when nothing carries a covering span
    """
    config = config or CursorConfig()
    line = position.line + 1
    column = position.ch + 1

    match: Optional[SyntaxNode] = None
    smallest = None

    for node in tree.walk():
        if node.position is None or not node.position.covers(line, column):
            continue
        area = span_area(node.position, config.multiline_weight)
        if smallest is None or area < smallest:
            smallest = area
            match = node

    return match
