# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""foldgraph - containment hierarchy for markdown syntax trees

Derives the implicit folding structure of a markdown document (headings own
their sections, list items own nested items, blockquotes own their body,
thematic breaks reset to the document root) and feeds it to graph and
cursor-context consumers.
"""
from foldgraph import logging_config  # noqa: F401
from foldgraph.config import Config, default_config
from foldgraph.domain_models import (
    ContainerTag,
    ContainmentEdge,
    NodeKind,
    Point,
    Span,
    SyntaxNode,
)
from foldgraph.parsing import MarkdownParser, parse_markdown
from foldgraph.containment import (
    ContainmentContractError,
    ContainmentInspector,
    ContainmentResolver,
    ContainmentTree,
    ContainmentTreeBuilder,
    build_tree,
    render,
    resolve,
)
from foldgraph.cursor import (
    CursorPosition,
    add_cursor_marker,
    build_context,
    find_node_at_position,
    remove_cursor_marker,
)
from foldgraph.graph import ContainmentGraphBuilder, EdgeRecord, NodeRecord

__version__ = "0.1.0"

__all__ = [
    'Config',
    'default_config',
    'ContainerTag',
    'ContainmentEdge',
    'NodeKind',
    'Point',
    'Span',
    'SyntaxNode',
    'MarkdownParser',
    'parse_markdown',
    'ContainmentContractError',
    'ContainmentInspector',
    'ContainmentResolver',
    'ContainmentTree',
    'ContainmentTreeBuilder',
    'build_tree',
    'render',
    'resolve',
    'CursorPosition',
    'add_cursor_marker',
    'build_context',
    'find_node_at_position',
    'remove_cursor_marker',
    'ContainmentGraphBuilder',
    'EdgeRecord',
    'NodeRecord',
]
