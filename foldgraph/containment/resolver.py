# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Containment Resolver - single-pass scope stack over a syntax tree

Models how a folding editor groups markdown content:
- Headings contain everything until the next heading of same or higher level
- List items contain their nested items
- Blockquotes contain their content
- Thematic breaks close every open scope

The tree is walked once in pre-order. Every node that is neither
transparent nor a thematic break is reported exactly once as a member of
whatever container is on top of the scope stack.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from foldgraph.config import ResolverConfig
from foldgraph.containment.node_classifier import NodeClassifier
from foldgraph.domain_models import ContainerTag, ContainmentEdge, SyntaxNode

logger = logging.getLogger(__name__)

ContainmentCallback = Callable[[SyntaxNode, SyntaxNode], None]


@dataclass
class Scope:
    """An open container on the scope stack"""
    node: SyntaxNode
    tag: ContainerTag
    depth: Optional[int] = None  # Headings only


class ContainmentResolver:
    """Resolve the containment hierarchy of a syntax tree

    Single Responsibility: Emit (container, member) pairs in document order

    The scope stack always keeps the root at the bottom; nothing ever pops
    it.
    """

    def __init__(self, config: Optional[ResolverConfig] = None,
                 classifier: Optional[NodeClassifier] = None):
        self.config = config or ResolverConfig()
        self.classifier = classifier or NodeClassifier(self.config.transparent_kinds)

    def resolve(self, tree: SyntaxNode, on_edge: ContainmentCallback) -> None:
        """Walk the tree once and report every containment pair

        Args:
            tree: Root of the parsed document
            on_edge: Called with (container, member) for each placed node

        Raises:
            ContainmentContractError: On a malformed container node. No
                further pairs are reported once raised.
        """
        stack = [Scope(tree, ContainerTag.ROOT)]

        for node, parent in tree.walk_with_parents():
            if node is tree or self.classifier.is_transparent(node):
                continue

            if self.classifier.is_thematic_break(node):
                self._unwind_to_root(stack)
                continue

            if self.classifier.is_container(node):
                self._place_container(stack, node, parent, on_edge)
            else:
                on_edge(stack[-1].node, node)

    def edges(self, tree: SyntaxNode) -> List[ContainmentEdge]:
        """Collect all containment pairs of a tree in emission order"""
        collected: List[ContainmentEdge] = []
        self.resolve(tree, lambda container, member: collected.append(
            ContainmentEdge(container, member)
        ))
        return collected

    def _place_container(self, stack: List[Scope], node: SyntaxNode,
                         parent: Optional[SyntaxNode],
                         on_edge: ContainmentCallback):
        """Trim the stack for a container node, attach it, then open it"""
        tag = self.classifier.container_tag(node)
        depth = None

        if tag is ContainerTag.HEADING:
            depth = self.classifier.heading_depth(node)
            self._close_for_heading(stack, depth)
        elif tag is ContainerTag.LIST_ITEM:
            self._close_for_list_item(stack, node, parent)
        # Blockquotes attach to whatever is open

        on_edge(stack[-1].node, node)
        stack.append(Scope(node, tag, depth))

    def _close_for_heading(self, stack: List[Scope], depth: int):
        """Pop scopes until a strictly shallower heading or the root is on top"""
        while len(stack) > 1:
            top = stack[-1]
            if top.tag is ContainerTag.ROOT:
                break
            if top.tag is ContainerTag.HEADING and top.depth < depth:
                break
            stack.pop()

    def _close_for_list_item(self, stack: List[Scope], node: SyntaxNode,
                             parent: Optional[SyntaxNode]):
        """Reset to the root unless the open list item directly encloses node

        A sibling item, or an item of an unrelated list, unwinds every open
        scope including enclosing headings and blockquotes.
        """
        top = stack[-1]
        if top.tag is not ContainerTag.LIST_ITEM:
            return
        if self.classifier.is_direct_parent_list_item(top.node, parent):
            return
        logger.debug(f"List item {node!r} is not nested under {top.node!r}; resetting to root")
        self._unwind_to_root(stack)

    @staticmethod
    def _unwind_to_root(stack: List[Scope]):
        while len(stack) > 1:
            stack.pop()


def resolve(tree: SyntaxNode, on_edge: ContainmentCallback,
            config: Optional[ResolverConfig] = None) -> None:
    """Resolve containment pairs of a tree with a default resolver"""
    ContainmentResolver(config).resolve(tree, on_edge)
