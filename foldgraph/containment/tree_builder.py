# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Containment Tree Builder - adjacency map from the resolver stream

Single Responsibility: Accumulate (container -> members) in document order
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from foldgraph.config import ResolverConfig
from foldgraph.containment.node_classifier import NodeClassifier
from foldgraph.containment.resolver import ContainmentResolver
from foldgraph.domain_models import ContainerTag, SyntaxNode


@dataclass
class ContainmentTree:
    """Containment hierarchy of one document version

    Maps are keyed by node identity. Members keep the order in which the
    resolver reported them.
    """
    root: SyntaxNode
    members: Dict[SyntaxNode, List[SyntaxNode]] = field(default_factory=dict)
    container_of: Dict[SyntaxNode, SyntaxNode] = field(default_factory=dict)

    def get_members(self, container: SyntaxNode) -> List[SyntaxNode]:
        """Get the direct members of a container (empty list if none)"""
        return list(self.members.get(container, ()))

    def get_container(self, member: SyntaxNode) -> Optional[SyntaxNode]:
        """Get the container a node was assigned to, or None"""
        return self.container_of.get(member)

    def containers(self) -> List[SyntaxNode]:
        """All nodes that own at least one member, in first-seen order"""
        return list(self.members)

    def tag_of(self, node: SyntaxNode) -> Optional[ContainerTag]:
        """Container tag of a node, or None for non-containers"""
        if node is self.root:
            return ContainerTag.ROOT
        if NodeClassifier.is_container(node):
            return NodeClassifier.container_tag(node)
        return None

    def descendants(self, container: SyntaxNode) -> List[SyntaxNode]:
        """All nodes nested under a container, in pre-order

        Safe against externally introduced cycles: each node is listed once.
        """
        result: List[SyntaxNode] = []
        visited = {id(container)}
        stack = list(reversed(self.members.get(container, ())))

        while stack:
            node = stack.pop()
            if id(node) in visited:
                continue
            visited.add(id(node))
            result.append(node)
            stack.extend(reversed(self.members.get(node, ())))

        return result

    def __len__(self) -> int:
        return len(self.container_of)


class ContainmentTreeBuilder:
    """Build containment trees from syntax trees

    Re-entrant: every call produces an independent tree and leaves the
    input untouched.
    """

    def __init__(self, resolver: Optional[ContainmentResolver] = None,
                 config: Optional[ResolverConfig] = None):
        self.resolver = resolver or ContainmentResolver(config)

    def build(self, tree: SyntaxNode) -> ContainmentTree:
        """Run the resolver once and collect its pairs

        Args:
            tree: Root of the parsed document

        Returns:
            ContainmentTree with members in first-seen append order
        """
        result = ContainmentTree(root=tree)

        def collect(container: SyntaxNode, member: SyntaxNode):
            result.members.setdefault(container, []).append(member)
            result.container_of[member] = container

        self.resolver.resolve(tree, collect)
        return result


def build_tree(tree: SyntaxNode, config: Optional[ResolverConfig] = None) -> ContainmentTree:
    """Build a containment tree with a default builder"""
    return ContainmentTreeBuilder(config=config).build(tree)
