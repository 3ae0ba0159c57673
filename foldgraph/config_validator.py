# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""
Configuration validator.

Validates configuration settings early to provide clear error messages
before a resolver or inspector runs with settings that would silently
corrupt the containment hierarchy.
"""
from typing import List

from foldgraph.domain_models import CONTAINER_KINDS, NodeKind


class ConfigValidationError(Exception):
    """Configuration validation failed"""
    pass


class ConfigValidator:
    """Validates foldgraph configuration"""

    def __init__(self, config):
        self.config = config
        self.errors: List[str] = []

    def validate(self) -> None:
        """Validate all configuration settings

        Raises:
            ConfigValidationError: If validation fails
        """
        self.errors = []
        self._validate_transparent_kinds()
        self._validate_inspector()
        self._validate_cursor()
        self._validate_graph()

        if self.errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(
                f"  - {error}" for error in self.errors
            )
            raise ConfigValidationError(error_msg)

    def _validate_transparent_kinds(self) -> None:
        """Transparent kinds must not shadow containers or resets"""
        kinds = self.config.resolver.transparent_kinds
        # Root is transparent when revisited; the other containers never are
        shadowed = sorted((set(kinds) & CONTAINER_KINDS) - {NodeKind.ROOT})
        if shadowed:
            self.errors.append(
                f"Container kinds cannot be transparent: {', '.join(shadowed)}"
            )
        if NodeKind.THEMATIC_BREAK in kinds:
            self.errors.append("thematicBreak cannot be transparent")

    def _validate_inspector(self) -> None:
        if self.config.inspector.summary_threshold < 0:
            self.errors.append(
                f"Inspector summary_threshold must be >= 0, "
                f"got {self.config.inspector.summary_threshold}"
            )

    def _validate_cursor(self) -> None:
        cursor = self.config.cursor
        if cursor.multiline_weight <= 0:
            self.errors.append(
                f"Cursor multiline_weight must be positive, got {cursor.multiline_weight}"
            )
        if not cursor.marker:
            self.errors.append("Cursor marker cannot be empty")

    def _validate_graph(self) -> None:
        graph = self.config.graph
        if not graph.relationship_type or not graph.relationship_type.strip():
            self.errors.append("Graph relationship_type cannot be empty")
        if graph.preview_chars <= 0:
            self.errors.append(
                f"Graph preview_chars must be positive, got {graph.preview_chars}"
            )
