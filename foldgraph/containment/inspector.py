# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Containment Inspector - human-readable rendering for diagnostics

Renders the containment hierarchy (not the flat parse tree) one node per
line with box-drawing indentation:

    root (1:1-9:1)
    ├─ heading[2] (1:1-1:13)
    │  └─ paragraph (2:1-2:20)
    └─ heading[2] (4:1-4:13)

The structure handed in may have been mutated or shared by a caller, so
rendering guards against cycles and duplicates instead of trusting the
resolver's acyclicity.
"""
from collections import OrderedDict
from typing import List, Mapping, Optional, Sequence, Set, Union

from foldgraph.config import InspectorConfig
from foldgraph.containment.node_classifier import NodeClassifier
from foldgraph.containment.tree_builder import ContainmentTree, ContainmentTreeBuilder
from foldgraph.domain_models import NodeKind, SyntaxNode

BRANCH = '├─ '
LAST_BRANCH = '└─ '
PIPE = '│  '
SPACE = '   '

MembersMap = Mapping[SyntaxNode, Sequence[SyntaxNode]]


class ContainmentInspector:
    """Render containment trees and syntax trees as indented text

    Handles:
    - Circular references within one root-to-leaf path (marked, not followed)
    - Nodes shared between branches (rendered at first encounter only)
    - Summary line for containers with many non-container members
    """

    def __init__(self, config: Optional[InspectorConfig] = None):
        self.config = config or InspectorConfig()

    def render(self, tree: Union[ContainmentTree, SyntaxNode],
               members: Optional[MembersMap] = None) -> str:
        """Render a containment hierarchy

        Args:
            tree: ContainmentTree, or a root node (resolved here when members
                is not given)
            members: Optional container -> members map (defaults to tree.members)

        Returns:
            Multi-line text, one node per line
        """
        if isinstance(tree, ContainmentTree):
            root = tree.root
            members = tree.members if members is None else members
        else:
            root = tree
            if members is None:
                members = ContainmentTreeBuilder().build(tree).members

        lines: List[str] = []
        in_path: Set[int] = set()
        seen: Set[int] = set()
        self._render_node(root, members, lines, in_path, seen,
                          level=0, is_last=True, prefix='')
        return ''.join(line + '\n' for line in lines)

    def _render_node(self, node: SyntaxNode, members: MembersMap,
                     lines: List[str], in_path: Set[int], seen: Set[int],
                     level: int, is_last: bool, prefix: str):
        if id(node) in in_path:
            lines.append(prefix + (LAST_BRANCH if is_last else BRANCH)
                         + self.format_node(node) + ' [circular ref]')
            return

        if id(node) in seen:
            return

        in_path.add(id(node))
        seen.add(id(node))

        node_prefix = '' if level == 0 else (LAST_BRANCH if is_last else BRANCH)
        child_prefix = prefix + ('' if level == 0 else (SPACE if is_last else PIPE))

        lines.append(prefix + node_prefix + self.format_node(node))

        contained = list(members.get(node, ()))
        if contained:
            containers = [n for n in contained if NodeClassifier.is_container(n)]
            non_containers = [n for n in contained if not NodeClassifier.is_container(n)]

            if len(non_containers) > self.config.summary_threshold:
                summary_prefix = LAST_BRANCH if not containers else BRANCH
                lines.append(child_prefix + summary_prefix
                             + self._summarize(non_containers))
                to_render = containers
            else:
                to_render = contained

            for i, child in enumerate(to_render):
                self._render_node(child, members, lines, in_path, seen,
                                  level + 1, i == len(to_render) - 1, child_prefix)

        in_path.discard(id(node))

    def _summarize(self, nodes: List[SyntaxNode]) -> str:
        """Group non-container nodes by kind with per-kind counts"""
        counts: 'OrderedDict[str, int]' = OrderedDict()
        for node in nodes:
            counts[node.type] = counts.get(node.type, 0) + 1

        summary = ', '.join(f"{kind}({count})" for kind, count in counts.items())
        return f"[{len(nodes)} non-container nodes: {summary}]"

    def format_node(self, node: SyntaxNode) -> str:
        """Format a single node label with kind details and position"""
        label = node.type

        if node.type == NodeKind.HEADING:
            label = f"heading[{node.depth}]"
        elif node.type == NodeKind.TEXT:
            label = f'text "{node.value}"'
        elif node.type == NodeKind.CODE:
            label = f"code[{node.lang or ''}]"
        elif node.type == NodeKind.LIST_ITEM and node.checked is not None:
            label = f"listItem[{'✓' if node.checked else '✗'}]"

        if self.config.show_positions and node.position is not None:
            return f"{label} ({node.position})"
        return label

    def render_syntax_tree(self, tree: SyntaxNode) -> str:
        """Render the raw parse tree (parentage, not containment)"""
        lines: List[str] = []

        def visit(node: SyntaxNode, level: int, is_last: bool, prefix: str):
            node_prefix = '' if level == 0 else (LAST_BRANCH if is_last else BRANCH)
            lines.append(prefix + node_prefix + self.format_node(node))
            child_prefix = prefix + ('' if level == 0 else (SPACE if is_last else PIPE))
            for i, child in enumerate(node.children):
                visit(child, level + 1, i == len(node.children) - 1, child_prefix)

        visit(tree, 0, True, '')
        return ''.join(line + '\n' for line in lines)


def render(tree: Union[ContainmentTree, SyntaxNode],
           members: Optional[MembersMap] = None,
           config: Optional[InspectorConfig] = None) -> str:
    """Render a containment hierarchy with a default inspector"""
    return ContainmentInspector(config).render(tree, members)
