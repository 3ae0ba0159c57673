# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

from foldgraph.containment.node_classifier import ContainmentContractError, NodeClassifier
from foldgraph.containment.resolver import (
    ContainmentCallback,
    ContainmentResolver,
    Scope,
    resolve,
)
from foldgraph.containment.tree_builder import (
    ContainmentTree,
    ContainmentTreeBuilder,
    build_tree,
)
from foldgraph.containment.inspector import ContainmentInspector, render

__all__ = [
    'ContainmentContractError',
    'NodeClassifier',
    'ContainmentCallback',
    'ContainmentResolver',
    'Scope',
    'resolve',
    'ContainmentTree',
    'ContainmentTreeBuilder',
    'build_tree',
    'ContainmentInspector',
    'render',
]
