# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""
Configuration constants for foldgraph
"""
from dataclasses import dataclass, field
from typing import FrozenSet

# Kinds that never become containers or members; their children attach
# to whatever scope is currently open.
DEFAULT_TRANSPARENT_KINDS = frozenset({'root', 'list', 'text', 'strong', 'emphasis'})

@dataclass
class ResolverConfig:
    """Containment resolver configuration"""
    transparent_kinds: FrozenSet[str] = field(default_factory=lambda: DEFAULT_TRANSPARENT_KINDS)

@dataclass
class InspectorConfig:
    """Containment tree rendering configuration"""
    summary_threshold: int = 5  # Collapse non-container members above this count
    show_positions: bool = True

@dataclass
class CursorConfig:
    """Cursor lookup and context configuration"""
    multiline_weight: int = 1000  # Any multi-line span outranks any single-line span
    marker: str = "<CURSOR>"

@dataclass
class ParserConfig:
    """Markdown parser adapter configuration"""
    tables: bool = True
    strikethrough: bool = True
    frontmatter: bool = True
    task_items: bool = True

@dataclass
class GraphConfig:
    """Graph population configuration"""
    relationship_type: str = "contains"
    preview_chars: int = 200  # Max length of the 'text' property

@dataclass
class Config:
    """Main configuration container"""
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    inspector: InspectorConfig = field(default_factory=InspectorConfig)
    cursor: CursorConfig = field(default_factory=CursorConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)

# Default instance
default_config = Config()
