# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Graph Query Helper - traversal over the containment graph

Single Responsibility: Graph traversal and query operations
"""

import networkx as nx
from typing import Any, Dict, List, Optional, Set


class GraphQuery:
    """Query operations for the containment graph

    Handles:
    - Direct members of a container (ordered by rank)
    - Container lookup for a member
    - Multi-level descendant traversal
    - Property-based element lookup
    """

    def __init__(self, edge_type: str = "contains"):
        self.edge_type = edge_type

    def get_members(self, graph: nx.MultiDiGraph, node_id: str) -> List[str]:
        """Get member IDs of a container in document order

        Args:
            graph: NetworkX graph to query
            node_id: Container node ID

        Returns:
            List of member node IDs ([] for unknown nodes)
        """
        if not graph.has_node(node_id):
            return []

        ranked = [
            (data.get('rank', 0), target)
            for _, target, data in graph.out_edges(node_id, data=True)
            if data.get('edge_type') == self.edge_type
        ]
        return [target for _, target in sorted(ranked)]

    def get_container(self, graph: nx.MultiDiGraph, node_id: str) -> Optional[str]:
        """Get the container ID of a member, or None"""
        if not graph.has_node(node_id):
            return None

        for source, _, data in graph.in_edges(node_id, data=True):
            if data.get('edge_type') == self.edge_type:
                return source
        return None

    def get_descendants(self, graph: nx.MultiDiGraph, node_id: str,
                        max_depth: Optional[int] = None) -> List[str]:
        """Get all nodes nested under a container

        Args:
            graph: NetworkX graph
            node_id: Starting container ID
            max_depth: Levels to descend (None = unlimited, 1 = direct members)

        Returns:
            Node IDs level by level, each listed once
        """
        if not graph.has_node(node_id):
            return []

        visited = {node_id}
        frontier = [node_id]
        result: List[str] = []
        depth = 0

        while frontier and (max_depth is None or depth < max_depth):
            frontier = self._expand_frontier(graph, frontier, visited)
            result.extend(frontier)
            depth += 1

        return result

    def _expand_frontier(self, graph: nx.MultiDiGraph, frontier: List[str],
                         visited: Set[str]) -> List[str]:
        """Expand frontier by one containment level

        Args:
            graph: NetworkX graph
            frontier: Current frontier nodes
            visited: Set of all visited nodes (updated in place)

        Returns:
            New frontier nodes in member order
        """
        new_frontier = []
        for node in frontier:
            for member in self.get_members(graph, node):
                if member not in visited:
                    visited.add(member)
                    new_frontier.append(member)
        return new_frontier

    def query_elements(self, graph: nx.MultiDiGraph, node_type: str,
                       properties: Optional[Dict[str, Any]] = None,
                       limit: Optional[int] = None) -> List[Dict]:
        """Find nodes of a type whose properties match exactly

        Args:
            graph: NetworkX graph
            node_type: Node type to match (e.g. 'heading')
            properties: Property values that must all match
            limit: Maximum number of results

        Returns:
            List of node attribute dictionaries
        """
        properties = properties or {}
        matches = []

        for _, data in graph.nodes(data=True):
            if data.get('node_type') != node_type:
                continue
            if all(data.get(key) == value for key, value in properties.items()):
                matches.append(data)
                if limit is not None and len(matches) >= limit:
                    break

        return matches
