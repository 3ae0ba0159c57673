# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Domain models for markdown syntax trees and their containment hierarchy

SyntaxNode mirrors the mdast shape produced by the parser adapter: a kind
string, ordered children, an optional positional span and a handful of
kind-specific fields. Nodes are entities: two textually identical headings
are different nodes, so equality and hashing are by identity.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class NodeKind:
    """mdast node kind names

    Kinds are plain strings so that parser extensions can introduce new
    ones without touching this module.
    """
    ROOT = 'root'
    HEADING = 'heading'
    PARAGRAPH = 'paragraph'
    TEXT = 'text'
    EMPHASIS = 'emphasis'
    STRONG = 'strong'
    DELETE = 'delete'
    INLINE_CODE = 'inlineCode'
    CODE = 'code'
    BLOCKQUOTE = 'blockquote'
    LIST = 'list'
    LIST_ITEM = 'listItem'
    THEMATIC_BREAK = 'thematicBreak'
    IMAGE = 'image'
    LINK = 'link'
    BREAK = 'break'
    HTML = 'html'
    YAML = 'yaml'
    TABLE = 'table'
    TABLE_ROW = 'tableRow'
    TABLE_CELL = 'tableCell'


class ContainerTag(Enum):
    """Role of a node that can own later-appearing nodes"""
    ROOT = 'root'
    HEADING = 'heading'
    LIST_ITEM = 'listItem'
    BLOCKQUOTE = 'blockquote'


CONTAINER_KINDS = frozenset(tag.value for tag in ContainerTag)


@dataclass(frozen=True)
class Point:
    """A place in the source document (line and column are 1-indexed)"""
    line: int
    column: int
    offset: Optional[int] = None


@dataclass(frozen=True)
class Span:
    """Start/end points of a node; end column is one past the last character"""
    start: Point
    end: Point

    @property
    def is_multiline(self) -> bool:
        return self.end.line > self.start.line

    def covers(self, line: int, column: int) -> bool:
        """Check if a 1-indexed line/column falls inside this span (inclusive)"""
        if line < self.start.line or line > self.end.line:
            return False
        if line == self.start.line and column < self.start.column:
            return False
        if line == self.end.line and column > self.end.column:
            return False
        return True

    def __str__(self) -> str:
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"


@dataclass(eq=False)
class SyntaxNode:
    """A node of the parsed document tree

    Kind-specific fields:
    - depth:   headings only, 1..6 (smaller = higher precedence)
    - checked: task list items only (None = not a task)
    - value:   literal content of text, inlineCode, code, html, yaml
    - lang:    declared language of fenced code
    - url/title/alt: links and images
    - ordered/start: lists
    - data:    anything else a parser extension wants to carry
    """
    type: str
    children: List['SyntaxNode'] = field(default_factory=list)
    position: Optional[Span] = None
    depth: Optional[int] = None
    checked: Optional[bool] = None
    value: Optional[str] = None
    lang: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    alt: Optional[str] = None
    ordered: Optional[bool] = None
    start: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def walk(self) -> Iterator['SyntaxNode']:
        """Yield this node and all descendants in pre-order"""
        for node, _ in self.walk_with_parents():
            yield node

    def walk_with_parents(self) -> Iterator[tuple]:
        """Yield (node, parent) pairs in pre-order without recursion"""
        stack = [(self, None)]
        while stack:
            node, parent = stack.pop()
            yield node, parent
            for child in reversed(node.children):
                stack.append((child, node))

    def text_content(self) -> str:
        """Concatenate the values of all descendant text nodes"""
        return ''.join(
            node.value or '' for node in self.walk() if node.type == NodeKind.TEXT
        )

    def __repr__(self) -> str:
        if self.position is not None:
            return f"SyntaxNode({self.type!r}, {self.position})"
        return f"SyntaxNode({self.type!r})"


@dataclass(frozen=True)
class ContainmentEdge:
    """One (container, member) relationship emitted by the resolver

    Field equality falls through to SyntaxNode identity.
    """
    container: SyntaxNode
    member: SyntaxNode

    def __iter__(self):
        return iter((self.container, self.member))
