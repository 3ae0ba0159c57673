# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

from foldgraph.parsing.frontmatter_parser import FrontmatterBlock, FrontmatterParser
from foldgraph.parsing.markdown_parser import MarkdownParser, parse_markdown

__all__ = [
    'FrontmatterBlock',
    'FrontmatterParser',
    'MarkdownParser',
    'parse_markdown',
]
