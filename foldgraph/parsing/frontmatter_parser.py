# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Frontmatter parser - YAML metadata block at the top of a note

Single Responsibility: Detect, split and parse frontmatter

Handles YAML frontmatter blocks (--- ... ---) at the very start of a
markdown file. The markdown parser needs the raw block and how many lines
it consumed so that body positions stay document-relative.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class FrontmatterBlock:
    """A frontmatter block split off the top of a document"""
    raw: str          # YAML text between the fences
    length: int       # Characters consumed, closing fence included
    line_count: int   # Lines consumed before the body starts
    end_line: int     # 1-based line of the closing fence
    data: Optional[Dict[str, Any]] = None


class FrontmatterParser:
    """Parse YAML frontmatter from markdown content"""

    def __init__(self):
        """Initialize parser with frontmatter regex"""
        self.frontmatter_pattern = re.compile(r'^---\n(?:(.*?)\n)??---[ \t]*(?:\n|$)', re.DOTALL)

    def split(self, content: str) -> Optional[FrontmatterBlock]:
        """Split frontmatter off the start of content

        Args:
            content: Markdown content with potential frontmatter

        Returns:
            FrontmatterBlock, or None if content does not start with one
        """
        match = self.frontmatter_pattern.match(content)
        if not match:
            return None

        block_text = match.group(0)
        return FrontmatterBlock(
            raw=match.group(1) or '',
            length=match.end(),
            line_count=block_text.count('\n'),
            end_line=block_text.rstrip('\n').count('\n') + 1,
            data=self._load(match.group(1) or ''),
        )

    def extract_frontmatter(self, content: str) -> Optional[Dict]:
        """Extract YAML frontmatter from content

        Returns:
            Dict of frontmatter data, or None if not present/invalid
        """
        block = self.split(content)
        return block.data if block else None

    def remove_frontmatter(self, content: str) -> str:
        """Remove frontmatter from content"""
        return self.frontmatter_pattern.sub('', content, count=1)

    def _load(self, raw: str) -> Optional[Dict]:
        """Parse YAML, tolerating malformed or non-mapping frontmatter"""
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            logger.warning(f"Invalid YAML frontmatter ignored: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Frontmatter is not a mapping ({type(data).__name__}); ignored")
            return None
        return data
