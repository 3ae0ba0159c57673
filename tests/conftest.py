"""
Pytest configuration and shared fixtures

Common fixtures used across multiple test files are defined here.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path so the package imports without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from foldgraph.config import Config
from foldgraph.containment import ContainmentInspector, ContainmentResolver, ContainmentTreeBuilder
from foldgraph.parsing import MarkdownParser


@pytest.fixture
def config():
    """Fresh default configuration"""
    return Config()


@pytest.fixture
def parser():
    """Markdown parser with default settings"""
    return MarkdownParser()


@pytest.fixture
def resolver():
    return ContainmentResolver()


@pytest.fixture
def builder():
    return ContainmentTreeBuilder()


@pytest.fixture
def inspector():
    return ContainmentInspector()


@pytest.fixture
def edges_of(parser, resolver):
    """Parse markdown and return (tree, list of (container, member) pairs)

    Use this fixture when a test only cares about the emitted stream.
    """
    def _edges_of(markdown: str):
        tree = parser.parse(markdown)
        pairs = []
        resolver.resolve(tree, lambda container, member: pairs.append((container, member)))
        return tree, pairs
    return _edges_of
