# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""Containment graph - node and edge records for a graph sink

Mints a session-stable ID for every syntax node, records node properties
and turns the resolver's (container, member) stream into ranked
containment edges. The networkx graph is the in-memory staging area; an
external store consumes node_records() / edge_records().
"""
import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

import networkx as nx

from foldgraph.config import GraphConfig
from foldgraph.containment.resolver import ContainmentResolver
from foldgraph.domain_models import NodeKind, SyntaxNode
from foldgraph.graph.graph_query import GraphQuery

logger = logging.getLogger(__name__)

# Kinds whose literal value is not prose (no tags or block refs)
_LITERAL_KINDS = {NodeKind.CODE, NodeKind.INLINE_CODE, NodeKind.HTML, NodeKind.YAML}


@dataclass
class NodeRecord:
    """A node as handed to the graph store: (id, type, properties)"""
    node_id: str
    node_type: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return asdict(self)


@dataclass
class EdgeRecord:
    """An edge as handed to the graph store: (from, to, type)"""
    source: str
    target: str
    edge_type: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return asdict(self)


class ContainmentGraphBuilder:
    """Populate a graph from one document's syntax tree

    IDs are only stable for one processing session: add_document() resets
    the counter and the graph before every document.
    """

    def __init__(self, config: Optional[GraphConfig] = None,
                 resolver: Optional[ContainmentResolver] = None):
        self.config = config or GraphConfig()
        self.resolver = resolver or ContainmentResolver()
        self.graph = nx.MultiDiGraph()
        self.node_ids: Dict[SyntaxNode, str] = {}
        self.query = GraphQuery(self.config.relationship_type)

        self._node_id_counter = 0
        self.tag_pattern = re.compile(r'#([\w/\-]+)')
        self.ref_pattern = re.compile(r'\^([A-Za-z0-9\-]+)\s*$')

    def reset(self):
        """Clear IDs and graph before processing a new document"""
        self._node_id_counter = 0
        self.node_ids.clear()
        self.graph.clear()

    def add_document(self, tree: SyntaxNode, source_file: Optional[str] = None) -> int:
        """Add a parsed document to the graph

        Args:
            tree: Parsed document root
            source_file: Optional path the document came from

        Returns:
            Number of nodes created
        """
        self.reset()
        self._create_nodes(tree, source_file)
        edge_count = self._create_containment_edges(tree)

        logger.debug(f"Graph for {source_file or '<document>'}: "
                     f"{len(self.node_ids)} nodes, {edge_count} edges")
        return len(self.node_ids)

    def node_id(self, node: SyntaxNode) -> Optional[str]:
        """Get the ID minted for a node in this session"""
        return self.node_ids.get(node)

    def _next_node_id(self, node: SyntaxNode) -> str:
        node_id = f"{node.type}-{self._node_id_counter}"
        self._node_id_counter += 1
        return node_id

    def _create_nodes(self, tree: SyntaxNode, source_file: Optional[str]):
        """Create a graph node for every syntax node, transparent ones included"""
        for node in tree.walk():
            node_id = self._next_node_id(node)
            self.node_ids[node] = node_id
            record = NodeRecord(node_id, node.type, self._node_properties(node, source_file))
            self.graph.add_node(node_id, node_id=node_id, node_type=node.type,
                                **record.properties)

    def _node_properties(self, node: SyntaxNode, source_file: Optional[str]) -> Dict[str, Any]:
        text = node.value if node.value is not None else node.text_content()
        prose = node.type not in _LITERAL_KINDS

        return {
            'text': text[:self.config.preview_chars],
            'state': self._task_state(node),
            'tags': sorted(set(self.tag_pattern.findall(text))) if prose else [],
            'ref': self._block_ref(text) if prose else None,
            'source_file': source_file,
            'line': node.position.start.line if node.position else None,
            'depth': node.depth,
            'lang': node.lang,
        }

    @staticmethod
    def _task_state(node: SyntaxNode) -> Optional[str]:
        if node.checked is None:
            return None
        return 'done' if node.checked else 'open'

    def _block_ref(self, text: str) -> Optional[str]:
        match = self.ref_pattern.search(text)
        return match.group(1) if match else None

    def _create_containment_edges(self, tree: SyntaxNode) -> int:
        """Turn resolver pairs into ranked containment edges"""
        processed: Set[Tuple[str, str]] = set()

        def add_edge(container: SyntaxNode, member: SyntaxNode):
            pair = (self.node_ids[container], self.node_ids[member])
            if pair in processed:
                return
            processed.add(pair)
            self.graph.add_edge(*pair, edge_type=self.config.relationship_type,
                                rank=len(processed) - 1)

        self.resolver.resolve(tree, add_edge)
        return len(processed)

    # ============================================================
    # RECORDS FOR THE GRAPH STORE
    # ============================================================

    def node_records(self) -> List[NodeRecord]:
        """All nodes as (id, type, properties) records in creation order"""
        records = []
        for node_id, data in self.graph.nodes(data=True):
            properties = {k: v for k, v in data.items() if k not in ('node_id', 'node_type')}
            records.append(NodeRecord(node_id, data['node_type'], properties))
        return records

    def edge_records(self) -> List[EdgeRecord]:
        """All edges as (from, to, type) records in rank order"""
        records = [
            EdgeRecord(source, target, data['edge_type'],
                       {k: v for k, v in data.items() if k != 'edge_type'})
            for source, target, data in self.graph.edges(data=True)
        ]
        return sorted(records, key=lambda record: record.properties.get('rank', 0))

    # ============================================================
    # QUERY OPERATIONS (delegate to GraphQuery)
    # ============================================================

    def get_members(self, node_id: str) -> List[str]:
        return self.query.get_members(self.graph, node_id)

    def get_container(self, node_id: str) -> Optional[str]:
        return self.query.get_container(self.graph, node_id)

    def get_descendants(self, node_id: str, max_depth: Optional[int] = None) -> List[str]:
        return self.query.get_descendants(self.graph, node_id, max_depth)

    def query_elements(self, node_type: str, limit: Optional[int] = None,
                       **properties) -> List[Dict]:
        """Find nodes of a type with matching properties"""
        return self.query.query_elements(self.graph, node_type, properties, limit)

    # ============================================================
    # GRAPH I/O OPERATIONS
    # ============================================================

    def export_graph(self) -> Dict:
        """Export graph to JSON-serializable format"""
        return {
            'nodes': [record.to_dict() for record in self.node_records()],
            'edges': [record.to_dict() for record in self.edge_records()],
            'stats': {
                'total_nodes': self.graph.number_of_nodes(),
                'total_edges': self.graph.number_of_edges(),
                'node_types': self._count_node_types(),
                'edge_types': self._count_edge_types()
            }
        }

    def _count_node_types(self) -> Dict[str, int]:
        """Count nodes by type"""
        counts = {}
        for _, data in self.graph.nodes(data=True):
            node_type = data.get('node_type', 'unknown')
            counts[node_type] = counts.get(node_type, 0) + 1
        return counts

    def _count_edge_types(self) -> Dict[str, int]:
        """Count edges by type"""
        counts = {}
        for _, _, data in self.graph.edges(data=True):
            edge_type = data.get('edge_type', 'unknown')
            counts[edge_type] = counts.get(edge_type, 0) + 1
        return counts
