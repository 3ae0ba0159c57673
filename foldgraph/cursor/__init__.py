# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

from foldgraph.cursor.position_finder import CursorPosition, find_node_at_position, span_area
from foldgraph.cursor.context_builder import (
    add_cursor_marker,
    build_context,
    content_from_node,
    find_ancestors,
    find_top_level_ancestor,
    remove_cursor_marker,
)

__all__ = [
    'CursorPosition',
    'find_node_at_position',
    'span_area',
    'add_cursor_marker',
    'build_context',
    'content_from_node',
    'find_ancestors',
    'find_top_level_ancestor',
    'remove_cursor_marker',
]
