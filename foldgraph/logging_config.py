# Copyright (c) 2024 foldgraph Contributors
# SPDX-License-Identifier: MIT

"""
Centralized logging configuration for foldgraph.

Quiets the markdown parser's own debug chatter so that foldgraph's debug
output (stack resets, frontmatter problems) stays readable.

Import triggers configuration - no function call needed.
"""
import logging

_SUPPRESSED_LOGGERS = [
    'markdown_it',
]

for _logger_name in _SUPPRESSED_LOGGERS:
    logging.getLogger(_logger_name).setLevel(logging.WARNING)

# Library: leave handler configuration to the application
logging.getLogger('foldgraph').addHandler(logging.NullHandler())
