# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Node Classifier - kind checks shared by the resolver and inspector

Single Responsibility: Decide what role a syntax node plays in the
containment pass (transparent, reset, container or leaf member).
"""
from typing import FrozenSet, Optional

from foldgraph.config import DEFAULT_TRANSPARENT_KINDS
from foldgraph.domain_models import CONTAINER_KINDS, ContainerTag, NodeKind, SyntaxNode


class ContainmentContractError(ValueError):
    """A node violates the shape the containment pass relies on"""
    pass


_CONTAINER_TAGS = {tag.value: tag for tag in ContainerTag}


class NodeClassifier:
    """Classify syntax nodes for containment resolution

    Handles:
    - Transparent kinds (a closed set, checked once per node)
    - Thematic breaks (hard reset)
    - Container kinds and their tags
    - List item parentage
    """

    def __init__(self, transparent_kinds: Optional[FrozenSet[str]] = None):
        if transparent_kinds is None:
            transparent_kinds = DEFAULT_TRANSPARENT_KINDS
        self.transparent_kinds = frozenset(transparent_kinds)

    def is_transparent(self, node: SyntaxNode) -> bool:
        return node.type in self.transparent_kinds

    def is_thematic_break(self, node: SyntaxNode) -> bool:
        return node.type == NodeKind.THEMATIC_BREAK

    @staticmethod
    def is_container(node: SyntaxNode) -> bool:
        """Check if node kind can own later-appearing nodes"""
        return node.type in CONTAINER_KINDS

    @staticmethod
    def container_tag(node: SyntaxNode) -> ContainerTag:
        """Get the container tag for a node

        Raises:
            ContainmentContractError: If the node kind is not a container
        """
        tag = _CONTAINER_TAGS.get(node.type)
        if tag is None:
            raise ContainmentContractError(f"Unknown container type: {node.type}")
        return tag

    @staticmethod
    def heading_depth(node: SyntaxNode) -> int:
        """Get a heading's depth, failing fast when it is missing

        Raises:
            ContainmentContractError: If depth is absent or not a positive int
        """
        depth = node.depth
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
            raise ContainmentContractError(
                f"Heading without a valid depth: {node!r} (depth={depth!r})"
            )
        return depth

    @staticmethod
    def is_direct_parent_list_item(candidate: SyntaxNode,
                                   item_parent: Optional[SyntaxNode]) -> bool:
        """Check if candidate list item directly encloses another list item

        True only when the item's enclosing list node is one of the
        candidate's own children (a nested sub-list one level down).

        Args:
            candidate: List item currently on top of the scope stack
            item_parent: Immediate parent of the list item being placed
        """
        if item_parent is None or item_parent.type != NodeKind.LIST:
            return False
        return any(
            child is item_parent
            for child in candidate.children
            if child.type == NodeKind.LIST
        )
