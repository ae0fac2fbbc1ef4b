"""Comment response models shared by comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from commenttree.domain.service import CommentNode


class CommentItem(BaseModel):
    """Comment in a response.

    Nested structure mirroring the domain tree node. Search results and
    root listings carry an empty children list.
    """

    id: int
    parent_id: int | None
    content: str
    created_at: datetime
    deleted: bool
    replyable: bool
    author: str
    children: list["CommentItem"]

    @classmethod
    def from_domain(cls, node: CommentNode) -> "CommentItem":
        """Convert domain CommentNode to response model.

        Converts the whole subtree without recursion, so thread depth is
        not bounded by the interpreter stack.

        Args:
            node: Domain comment node

        Returns:
            API response model with all descendants converted
        """
        # Pre-order walk; reversed, every child comes before its parent
        walk = []
        stack = [node]
        while stack:
            current = stack.pop()
            walk.append(current)
            stack.extend(current.children)

        converted: dict[int, CommentItem] = {}
        for current in reversed(walk):
            converted[id(current)] = cls(
                id=current.id,
                parent_id=current.parent_id,
                content=current.text,
                created_at=current.created_at,
                deleted=current.deleted,
                replyable=current.can_reply,
                author=current.author,
                children=[converted[id(child)] for child in current.children],
            )
        return converted[id(node)]
