"""Comment tree compilation.

Storage hands back comments as a flat list where each row only knows its
parent. The functions here rebuild the nesting and mask deleted comments
for presentation. They are pure: no I/O, no state kept between calls.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from commenttree.domain.model.comment import Comment
from commenttree.domain.value import CommentId

DELETED_PLACEHOLDER = "[comment deleted]"


@dataclass
class CommentNode:
    """Display-ready comment with its replies attached.

    A deleted comment keeps its place in the tree (children stay attached)
    but shows the placeholder text and cannot be replied to.
    """

    id: CommentId
    parent_id: CommentId | None
    text: str
    created_at: datetime
    deleted: bool
    can_reply: bool
    author: str
    children: list["CommentNode"] = field(default_factory=list)


def to_node(comment: Comment, placeholder: str = DELETED_PLACEHOLDER) -> CommentNode:
    """Convert a stored comment to a presentation node, applying masking.

    Args:
        comment: Stored comment
        placeholder: Text shown instead of a deleted comment's content

    Returns:
        Node without children
    """
    deleted = comment.deleted_at is not None
    return CommentNode(
        id=comment.id,
        parent_id=comment.parent_id,
        text=placeholder if deleted else comment.text,
        created_at=comment.created_at,
        deleted=deleted,
        can_reply=not deleted,
        author=comment.author,
    )


def build_tree(
    comments: Iterable[Comment],
    root_id: CommentId | None = None,
    placeholder: str = DELETED_PLACEHOLDER,
) -> list[CommentNode]:
    """Build nested comment nodes from a flat list.

    Algorithm:
    1. Convert every comment to a node and index it by ID
    2. Attach each node to its parent if the parent is in the index;
       a node whose parent was not fetched is left unattached
    3. Select the result:
       - root_id is None: every node without a parent
       - root_id given: only that node, with its descendants attached

    Sibling order and root order follow input order.

    Args:
        comments: Flat list of comments (IDs must be unique)
        root_id: Subtree root to return, None for all roots
        placeholder: Text shown instead of a deleted comment's content

    Returns:
        Root nodes, or a single-element list for a subtree
        (empty if root_id is not among the comments)
    """
    index: dict[CommentId, CommentNode] = {}
    for comment in comments:
        node = to_node(comment, placeholder)
        index[node.id] = node

    for node in index.values():
        if node.parent_id is None:
            continue
        parent = index.get(node.parent_id)
        if parent is not None:
            parent.children.append(node)

    if root_id is not None:
        root = index.get(root_id)
        return [root] if root is not None else []

    return [node for node in index.values() if node.parent_id is None]


def flatten_for_search(
    comments: Iterable[Comment], placeholder: str = DELETED_PLACEHOLDER
) -> list[CommentNode]:
    """Convert search hits to nodes without nesting them.

    Storage already excludes deleted comments from search; masking here
    covers rows that slip through.

    Args:
        comments: Ranked search hits
        placeholder: Text shown instead of a deleted comment's content

    Returns:
        Nodes in input order, none with children
    """
    return [to_node(comment, placeholder) for comment in comments]


def count_nodes(nodes: Iterable[CommentNode]) -> int:
    """Count nodes in a forest, descendants included."""
    count = 0
    stack = list(nodes)
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.children)
    return count


def tree_depth(nodes: Iterable[CommentNode]) -> int:
    """Number of levels in a forest (a lone root is 1, empty is 0)."""
    deepest = 0
    stack = [(node, 1) for node in nodes]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in node.children)
    return deepest
