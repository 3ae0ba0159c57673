# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Markdown parser adapter - markdown-it-py tokens to a positioned SyntaxNode tree

markdown-it-py produces a flat token stream with 0-based line maps. This
adapter folds it into an mdast-shaped tree:
- Block nodes get 1-based line/column/offset spans from the token maps
- Inline leaves get spans when their literal text can be found in the line
- Inline containers (emphasis, strong, delete, link) span their children
- List items starting with "[ ]" / "[x]" become tasks
- Leading YAML frontmatter becomes a `yaml` node
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from foldgraph.config import ParserConfig
from foldgraph.domain_models import NodeKind, Point, Span, SyntaxNode
from foldgraph.parsing.frontmatter_parser import FrontmatterBlock, FrontmatterParser

logger = logging.getLogger(__name__)

_BLOCK_OPEN_KINDS = {
    'heading_open': NodeKind.HEADING,
    'paragraph_open': NodeKind.PARAGRAPH,
    'blockquote_open': NodeKind.BLOCKQUOTE,
    'bullet_list_open': NodeKind.LIST,
    'ordered_list_open': NodeKind.LIST,
    'list_item_open': NodeKind.LIST_ITEM,
    'table_open': NodeKind.TABLE,
    'tr_open': NodeKind.TABLE_ROW,
    'th_open': NodeKind.TABLE_CELL,
    'td_open': NodeKind.TABLE_CELL,
}

_INLINE_OPEN_KINDS = {
    'em_open': NodeKind.EMPHASIS,
    'strong_open': NodeKind.STRONG,
    's_open': NodeKind.DELETE,
    'link_open': NodeKind.LINK,
}

_TASK_PATTERN = re.compile(r'^\[([ xX])\](?:[ \t]+|(?=\n)|$)')


@dataclass
class InlineCursor:
    """Search position inside the source lines of an inline run (0-based)"""
    line: Optional[int]
    column: int = 0

    def next_line(self):
        if self.line is not None:
            self.line += 1
        self.column = 0


@dataclass
class ParseState:
    """Per-document parsing state"""
    lines: List[str]
    line_starts: List[int]
    line_offset: int = 0  # Lines consumed by frontmatter
    quote_depth: int = 0
    stack: List[SyntaxNode] = field(default_factory=list)


class MarkdownParser:
    """Parse markdown text into a SyntaxNode tree

    Single Responsibility: Adapt markdown-it-py output to the tree shape the
    containment pass and cursor lookup consume. The tree is a fresh object
    graph on every call.
    """

    def __init__(self, config: Optional[ParserConfig] = None,
                 frontmatter_parser: Optional[FrontmatterParser] = None):
        self.config = config or ParserConfig()
        self.frontmatter_parser = frontmatter_parser or FrontmatterParser()
        self.md = self._create_markdown_it()

    def _create_markdown_it(self) -> MarkdownIt:
        md = MarkdownIt('commonmark')
        extensions = []
        if self.config.tables:
            extensions.append('table')
        if self.config.strikethrough:
            extensions.append('strikethrough')
        if extensions:
            md.enable(extensions)
        return md

    def parse(self, content: str) -> SyntaxNode:
        """Parse markdown content into a positioned tree

        Args:
            content: Raw markdown text

        Returns:
            Root SyntaxNode spanning the whole document
        """
        state = ParseState(lines=content.split('\n'),
                           line_starts=self._line_starts(content))
        root = SyntaxNode(NodeKind.ROOT, position=self._document_span(content, state))
        state.stack.append(root)

        body = content
        if self.config.frontmatter:
            block = self.frontmatter_parser.split(content)
            if block is not None:
                root.children.append(self._yaml_node(block, state))
                body = content[block.length:]
                state.line_offset = block.line_count

        for token in self.md.parse(body):
            self._handle_block(token, state)

        return root

    # ============================================================
    # BLOCK TOKENS
    # ============================================================

    def _handle_block(self, token: Token, state: ParseState):
        if token.nesting == 1:
            kind = _BLOCK_OPEN_KINDS.get(token.type)
            if kind is None:
                return  # thead/tbody wrappers have no mdast counterpart
            node = self._open_block(token, kind, state)
            state.stack[-1].children.append(node)
            state.stack.append(node)
            if kind == NodeKind.BLOCKQUOTE:
                state.quote_depth += 1
        elif token.nesting == -1:
            if token.type[:-len('close')] + 'open' not in _BLOCK_OPEN_KINDS:
                return
            node = state.stack.pop()
            if node.type == NodeKind.BLOCKQUOTE:
                state.quote_depth -= 1
            elif node.type == NodeKind.LIST_ITEM and self.config.task_items:
                self._detect_task(node)
        elif token.type == 'inline':
            self._append_inline(token, state)
        else:
            state.stack[-1].children.append(self._leaf_block(token, state))

    def _open_block(self, token: Token, kind: str, state: ParseState) -> SyntaxNode:
        node = SyntaxNode(kind, position=self._block_span(token.map, state))
        if kind == NodeKind.HEADING:
            node.depth = int(token.tag[1:])
        elif kind == NodeKind.LIST:
            node.ordered = token.type == 'ordered_list_open'
            if node.ordered:
                node.start = int(token.attrGet('start') or 1)
        return node

    def _leaf_block(self, token: Token, state: ParseState) -> SyntaxNode:
        position = self._block_span(token.map, state)

        if token.type == 'fence':
            info = token.info.strip()
            lang, _, meta = info.partition(' ')
            node = SyntaxNode(NodeKind.CODE, position=position,
                              value=token.content.rstrip('\n'), lang=lang or None)
            if meta.strip():
                node.data['meta'] = meta.strip()
            return node
        if token.type == 'code_block':
            return SyntaxNode(NodeKind.CODE, position=position,
                              value=token.content.rstrip('\n'))
        if token.type == 'hr':
            return SyntaxNode(NodeKind.THEMATIC_BREAK, position=position)
        if token.type == 'html_block':
            return SyntaxNode(NodeKind.HTML, position=position,
                              value=token.content.rstrip('\n'))

        logger.debug(f"Unmapped block token {token.type!r} kept as its own kind")
        return SyntaxNode(token.type, position=position,
                          value=token.content or None)

    def _yaml_node(self, block: FrontmatterBlock, state: ParseState) -> SyntaxNode:
        closing = state.lines[block.end_line - 1]
        span = self._span(state, 1, 1, block.end_line, len(closing.rstrip()) + 1)
        node = SyntaxNode(NodeKind.YAML, position=span, value=block.raw)
        node.data['frontmatter'] = block.data
        return node

    def _detect_task(self, item: SyntaxNode):
        """Turn a "[ ] ..." / "[x] ..." list item into a task"""
        if not item.children or item.children[0].type != NodeKind.PARAGRAPH:
            return
        paragraph = item.children[0]
        if not paragraph.children or paragraph.children[0].type != NodeKind.TEXT:
            return

        text = paragraph.children[0]
        match = _TASK_PATTERN.match(text.value or '')
        if not match:
            return

        item.checked = match.group(1) in 'xX'
        consumed = match.end()
        remainder = text.value[consumed:]
        if not remainder:
            paragraph.children.pop(0)
            return

        text.value = remainder
        if text.position is not None:
            start = text.position.start
            text.position = Span(
                Point(start.line, start.column + consumed,
                      None if start.offset is None else start.offset + consumed),
                text.position.end,
            )

    # ============================================================
    # INLINE TOKENS
    # ============================================================

    def _append_inline(self, token: Token, state: ParseState):
        first_line = token.map[0] + state.line_offset if token.map else None
        cursor = InlineCursor(line=first_line)
        stack: List[Tuple[SyntaxNode, Optional[Token]]] = [(state.stack[-1], None)]

        for child in token.children or []:
            parent = stack[-1][0]
            kind = _INLINE_OPEN_KINDS.get(child.type)

            if kind is not None:
                node = SyntaxNode(kind)
                if kind == NodeKind.LINK:
                    node.url = child.attrGet('href')
                    node.title = child.attrGet('title')
                parent.children.append(node)
                stack.append((node, child))
            elif child.nesting == -1:
                if len(stack) == 1:
                    continue
                node, opener = stack.pop()
                node.position = self._wrap_span(node, opener, state, cursor)
            elif child.type == 'text':
                if not child.content:
                    continue
                self._append_text(parent, child.content,
                                  self._locate(child.content, state, cursor))
            elif child.type == 'softbreak':
                self._append_text(parent, '\n', None)
                cursor.next_line()
            elif child.type == 'hardbreak':
                parent.children.append(SyntaxNode(NodeKind.BREAK))
                cursor.next_line()
            elif child.type == 'code_inline':
                parent.children.append(SyntaxNode(
                    NodeKind.INLINE_CODE, value=child.content,
                    position=self._locate(child.content, state, cursor)))
            elif child.type == 'image':
                parent.children.append(SyntaxNode(
                    NodeKind.IMAGE, url=child.attrGet('src'), alt=child.content,
                    title=child.attrGet('title'),
                    position=self._locate_image(state, cursor)))
            elif child.type == 'html_inline':
                parent.children.append(SyntaxNode(
                    NodeKind.HTML, value=child.content,
                    position=self._locate(child.content, state, cursor)))
            else:
                parent.children.append(SyntaxNode(child.type, value=child.content or None))

    def _append_text(self, parent: SyntaxNode, value: str, span: Optional[Span]):
        """Append text, merging with a preceding text sibling as mdast does"""
        last = parent.children[-1] if parent.children else None
        if last is None or last.type != NodeKind.TEXT:
            parent.children.append(SyntaxNode(NodeKind.TEXT, value=value, position=span))
            return

        last.value = (last.value or '') + value
        if last.position is not None and span is not None:
            last.position = Span(last.position.start, span.end)

    def _locate(self, value: str, state: ParseState, cursor: InlineCursor) -> Optional[Span]:
        """Find literal inline text in its source line and advance the cursor"""
        if not value or cursor.line is None or cursor.line >= len(state.lines):
            return None
        index = state.lines[cursor.line].find(value, cursor.column)
        if index < 0:
            return None

        cursor.column = index + len(value)
        line = cursor.line + 1
        return self._span(state, line, index + 1, line, index + len(value) + 1)

    def _locate_image(self, state: ParseState, cursor: InlineCursor) -> Optional[Span]:
        if cursor.line is None or cursor.line >= len(state.lines):
            return None
        text = state.lines[cursor.line]
        start = text.find('![', cursor.column)
        end = text.find(')', start) if start >= 0 else -1
        if end < 0:
            return None

        cursor.column = end + 1
        line = cursor.line + 1
        return self._span(state, line, start + 1, line, end + 2)

    def _wrap_span(self, node: SyntaxNode, opener: Optional[Token],
                   state: ParseState, cursor: InlineCursor) -> Optional[Span]:
        """Span an inline container from its first to its last located child"""
        located = [child.position for child in node.children if child.position is not None]
        if not located or opener is None:
            return None

        first, last = located[0].start, located[-1].end
        if node.type != NodeKind.LINK:
            width = len(opener.markup)
            return self._span(state, first.line, max(1, first.column - width),
                              last.line, last.column + width)

        text = state.lines[last.line - 1]
        end = last.column - 1  # 0-based index just past the link text
        if opener.markup == 'autolink':
            end += 1
        elif end < len(text) and text[end] == ']':
            end += 1
            if end < len(text) and text[end] == '(':
                close = text.find(')', end)
                end = close + 1 if close >= 0 else end
        if cursor.line == last.line - 1:
            cursor.column = max(cursor.column, end)
        return self._span(state, first.line, max(1, first.column - 1), last.line, end + 1)

    # ============================================================
    # POSITIONS
    # ============================================================

    @staticmethod
    def _line_starts(content: str) -> List[int]:
        starts = [0]
        for index, char in enumerate(content):
            if char == '\n':
                starts.append(index + 1)
        return starts

    def _document_span(self, content: str, state: ParseState) -> Span:
        last = len(state.lines)
        return Span(Point(1, 1, 0),
                    Point(last, len(state.lines[-1]) + 1, len(content)))

    def _block_span(self, token_map: Optional[List[int]], state: ParseState) -> Optional[Span]:
        """Convert a [start, end) 0-based line map to a 1-based span

        Trailing blank lines are trimmed; the start column skips
        indentation and enclosing blockquote markers.
        """
        if token_map is None:
            return None

        last_index = len(state.lines) - 1
        first = min(token_map[0] + state.line_offset, last_index)
        last = min(max(first, token_map[1] - 1 + state.line_offset), last_index)
        while last > first and self._is_blank(state.lines[last]):
            last -= 1

        start_column = self._content_column(state.lines[first], state.quote_depth)
        end_column = len(state.lines[last].rstrip()) + 1
        return self._span(state, first + 1, start_column, last + 1, end_column)

    @staticmethod
    def _is_blank(line: str) -> bool:
        return not line.strip(' \t>')

    @staticmethod
    def _content_column(line: str, quote_depth: int) -> int:
        """1-based column of the first character past indentation and quote markers"""
        index = 0
        while index < len(line) and line[index] in ' \t':
            index += 1
        for _ in range(quote_depth):
            if index >= len(line) or line[index] != '>':
                break
            index += 1
            while index < len(line) and line[index] in ' \t':
                index += 1
        return index + 1

    @staticmethod
    def _span(state: ParseState, start_line: int, start_column: int,
              end_line: int, end_column: int) -> Span:
        def point(line: int, column: int) -> Point:
            return Point(line, column, state.line_starts[line - 1] + column - 1)
        return Span(point(start_line, start_column), point(end_line, end_column))


def parse_markdown(content: str, config: Optional[ParserConfig] = None) -> SyntaxNode:
    """Parse markdown content with a default parser"""
    return MarkdownParser(config).parse(content)
