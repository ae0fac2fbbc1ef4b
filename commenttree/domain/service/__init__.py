"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import (
    DELETED_PLACEHOLDER,
    CommentNode,
    build_tree,
    count_nodes,
    flatten_for_search,
    to_node,
    tree_depth,
)
from .listing import normalize_root_request

__all__ = [
    "CommentNode",
    "CommentService",
    "DELETED_PLACEHOLDER",
    "Service",
    "build_tree",
    "count_nodes",
    "flatten_for_search",
    "normalize_root_request",
    "to_node",
    "tree_depth",
]
