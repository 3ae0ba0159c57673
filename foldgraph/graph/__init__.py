# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

from foldgraph.graph.graph_query import GraphQuery
from foldgraph.graph.containment_graph import (
    ContainmentGraphBuilder,
    EdgeRecord,
    NodeRecord,
)

__all__ = [
    'GraphQuery',
    'ContainmentGraphBuilder',
    'EdgeRecord',
    'NodeRecord',
]
