"""Tests for the markdown-it-py parser adapter

Covers tree shape and positions of the nodes the containment pass and
cursor lookup depend on.
"""

import pytest

from foldgraph.config import ParserConfig
from foldgraph.domain_models import NodeKind
from foldgraph.parsing import MarkdownParser, parse_markdown
from tests import find_all, find_list_item, find_node_of_type


class TestBlocks:
    """Block-level node kinds and fields"""

    def test_heading_depth_and_span(self, parser):
        tree = parser.parse("# Title")
        heading = tree.children[0]

        assert heading.type == NodeKind.HEADING
        assert heading.depth == 1
        assert str(heading.position) == "1:1-1:8"
        assert heading.position.start.offset == 0
        assert heading.position.end.offset == 7

    @pytest.mark.parametrize("markdown,depth", [
        ("## Two", 2),
        ("### Three", 3),
        ("###### Six", 6),
        ("Setext\n======", 1),
        ("Setext\n------", 2),
    ])
    def test_heading_levels(self, parser, markdown, depth):
        tree = parser.parse(markdown)

        assert tree.children[0].depth == depth

    def test_root_spans_document(self, parser):
        content = "# A\n\nbody\n"
        tree = parser.parse(content)

        assert tree.type == NodeKind.ROOT
        assert str(tree.position) == "1:1-4:1"
        assert tree.position.end.offset == len(content)

    def test_ordered_list_start(self, parser):
        tree = parser.parse("3. a\n4. b")
        lst = tree.children[0]

        assert lst.type == NodeKind.LIST
        assert lst.ordered is True
        assert lst.start == 3
        assert len(lst.children) == 2

    def test_bullet_list(self, parser):
        lst = parser.parse("- a\n- b").children[0]

        assert lst.ordered is False
        assert lst.start is None
        assert [item.type for item in lst.children] == [NodeKind.LIST_ITEM] * 2

    def test_fenced_code(self, parser):
        tree = parser.parse("```python title=x\nprint(1)\n```")
        code = tree.children[0]

        assert code.type == NodeKind.CODE
        assert code.lang == 'python'
        assert code.value == 'print(1)'
        assert code.data['meta'] == 'title=x'
        assert str(code.position) == "1:1-3:4"

    def test_indented_code(self, parser):
        code = parser.parse("    x = 1").children[0]

        assert code.type == NodeKind.CODE
        assert code.lang is None
        assert code.value == 'x = 1'

    def test_thematic_break(self, parser):
        tree = parser.parse("a\n\n---\n\nb")

        assert [node.type for node in tree.children] == [
            NodeKind.PARAGRAPH, NodeKind.THEMATIC_BREAK, NodeKind.PARAGRAPH,
        ]
        assert tree.children[1].position.start.line == 3

    def test_blockquote_content_column(self, parser):
        quote = parser.parse("> quote text").children[0]
        paragraph = quote.children[0]

        assert quote.type == NodeKind.BLOCKQUOTE
        assert quote.position.start.column == 1
        assert paragraph.type == NodeKind.PARAGRAPH
        assert paragraph.position.start.column == 3

    def test_html_block(self, parser):
        node = parser.parse("<div>\nhi\n</div>").children[0]

        assert node.type == NodeKind.HTML
        assert node.value.startswith('<div>')

    def test_table_rows_and_cells(self, parser):
        tree = parser.parse("| a | b |\n|---|---|\n| 1 | 2 |")
        table = tree.children[0]

        assert table.type == NodeKind.TABLE
        assert [row.type for row in table.children] == [NodeKind.TABLE_ROW] * 2
        for row in table.children:
            assert [cell.type for cell in row.children] == [NodeKind.TABLE_CELL] * 2
        assert table.children[1].children[0].text_content() == '1'

    def test_tables_disabled(self):
        parser = MarkdownParser(ParserConfig(tables=False))
        tree = parser.parse("| a | b |\n|---|---|\n| 1 | 2 |")

        assert find_node_of_type(tree, NodeKind.TABLE) is None

    def test_trailing_blank_lines_trimmed(self, parser):
        tree = parser.parse("- a\n- b\n\n\nafter")
        lst = tree.children[0]

        assert lst.position.end.line == 2


class TestTasks:
    """Task list item detection"""

    def test_checked_states(self, parser):
        tree = parser.parse("- [x] done\n- [ ] todo\n- plain")

        assert find_list_item(tree, 'done').checked is True
        assert find_list_item(tree, 'todo').checked is False
        assert find_list_item(tree, 'plain').checked is None

    def test_marker_stripped_from_text(self, parser):
        tree = parser.parse("- [X] done")
        text_node = find_node_of_type(tree, NodeKind.TEXT)

        assert text_node.value == 'done'
        assert str(text_node.position) == "1:7-1:11"

    def test_bare_marker_leaves_empty_paragraph(self, parser):
        item = find_node_of_type(parser.parse("- [ ]"), NodeKind.LIST_ITEM)

        assert item.checked is False
        assert item.children[0].children == []

    def test_brackets_without_space_are_text(self, parser):
        item = find_node_of_type(parser.parse("- [x]done"), NodeKind.LIST_ITEM)

        assert item.checked is None

    def test_task_detection_disabled(self):
        parser = MarkdownParser(ParserConfig(task_items=False))
        item = find_node_of_type(parser.parse("- [x] done"), NodeKind.LIST_ITEM)

        assert item.checked is None
        assert item.text_content() == '[x] done'


class TestInline:
    """Inline node kinds and spans"""

    def test_emphasis_and_strong(self, parser):
        paragraph = parser.parse("Some *em* and **bold**").children[0]

        assert [node.type for node in paragraph.children] == [
            NodeKind.TEXT, NodeKind.EMPHASIS, NodeKind.TEXT, NodeKind.STRONG,
        ]

    def test_no_empty_text_after_closing_markup(self, parser):
        tree = parser.parse("Some *em* and **bold**\nnext **line**")

        texts = find_all(tree, NodeKind.TEXT)

        assert [node.value for node in texts] == ["Some ", "em", " and ", "bold", "\nnext ", "line"]
        assert all(node.value for node in texts)

    def test_strong_span_includes_markup(self, parser):
        tree = parser.parse("Some **bold** text")
        strong = find_node_of_type(tree, NodeKind.STRONG)

        assert str(strong.position) == "1:6-1:14"
        assert str(strong.children[0].position) == "1:8-1:12"

    def test_strikethrough(self, parser):
        tree = parser.parse("~~gone~~")

        assert find_node_of_type(tree, NodeKind.DELETE).text_content() == 'gone'

    def test_link(self, parser):
        tree = parser.parse("[site](http://x.com)")
        link = find_node_of_type(tree, NodeKind.LINK)

        assert link.url == 'http://x.com'
        assert link.text_content() == 'site'
        assert str(link.position) == "1:1-1:21"

    def test_image(self, parser):
        image = find_node_of_type(parser.parse("![alt](img.png)"), NodeKind.IMAGE)

        assert image.alt == 'alt'
        assert image.url == 'img.png'
        assert str(image.position) == "1:1-1:16"

    def test_inline_code(self, parser):
        code = find_node_of_type(parser.parse("use `x` here"), NodeKind.INLINE_CODE)

        assert code.value == 'x'

    def test_softbreak_merges_text(self, parser):
        paragraph = parser.parse("one\ntwo").children[0]

        assert len(paragraph.children) == 1
        assert paragraph.children[0].value == 'one\ntwo'
        assert str(paragraph.children[0].position) == "1:1-2:4"

    def test_hardbreak(self, parser):
        paragraph = parser.parse("one\\\ntwo").children[0]

        assert find_node_of_type(paragraph, NodeKind.BREAK) is not None


class TestFrontmatter:
    """Leading YAML block"""

    CONTENT = "---\ntitle: T\ntags: [a]\n---\n# Heading\n"

    def test_yaml_node_first(self, parser):
        tree = parser.parse(self.CONTENT)
        yaml_node = tree.children[0]

        assert yaml_node.type == NodeKind.YAML
        assert yaml_node.value == "title: T\ntags: [a]"
        assert yaml_node.data['frontmatter'] == {'title': 'T', 'tags': ['a']}
        assert str(yaml_node.position) == "1:1-4:4"

    def test_body_positions_document_relative(self, parser):
        tree = parser.parse(self.CONTENT)
        heading = tree.children[1]

        assert heading.type == NodeKind.HEADING
        assert str(heading.position) == "5:1-5:10"
        assert heading.position.start.offset == self.CONTENT.index('# Heading')

    def test_invalid_yaml_kept_without_data(self, parser):
        tree = parser.parse("---\nkey: [oops\n---\nBody")

        assert tree.children[0].type == NodeKind.YAML
        assert tree.children[0].data['frontmatter'] is None
        assert tree.children[1].position.start.line == 4

    def test_frontmatter_disabled(self):
        parser = MarkdownParser(ParserConfig(frontmatter=False))

        tree = parser.parse(self.CONTENT)

        assert find_node_of_type(tree, NodeKind.YAML) is None


class TestParserInstances:
    """Independence of parse results"""

    def test_fresh_tree_each_call(self, parser):
        first = parser.parse("# A")
        second = parser.parse("# A")

        assert first is not second
        assert first.children[0] is not second.children[0]

    def test_parse_markdown_function(self):
        tree = parse_markdown("# A\n\n- b")

        assert len(find_all(tree, NodeKind.LIST_ITEM)) == 1

    def test_empty_document(self, parser):
        tree = parser.parse("")

        assert tree.children == []
        assert str(tree.position) == "1:1-1:1"
