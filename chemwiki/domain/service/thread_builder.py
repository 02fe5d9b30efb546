"""Thread builder: nests a flat list of comments into reply trees."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from chemwiki.domain.model.comment import Comment
from chemwiki.domain.value import CommentId, CommentSort, CommentStatus, VoteTally

from .base import Service
from .vote_ledger import tally_for


@dataclass
class CommentTreeNode:
    """Node in a rendered discussion thread.

    ``content`` is what readers see: the stored (already escaped) text, or a
    placeholder when the comment is hidden but kept to hold its replies.
    """

    comment: Comment
    content: str
    depth: int
    tally: VoteTally
    children: list["CommentTreeNode"] = field(default_factory=list)

    @property
    def score(self) -> int:
        return self.tally.score

    @property
    def child_count(self) -> int:
        return len(self.children)


class ThreadBuilder(Service):
    """Builds depth-bounded reply trees. Holds no state between calls.

    Rules:
    - roots are comments without a parent; replies attach by ``parent_id``
    - nodes at depth ``max_depth`` or deeper are left out (roots are depth 0)
    - a deleted or spam comment without visible replies is left out; with
      visible replies it stays, showing a placeholder instead of its content
    - siblings are ordered by the requested sort at every level
    """

    def __init__(
        self,
        max_depth: int = 5,
        deleted_placeholder: str = "[Comment deleted]",
        removed_placeholder: str = "[Comment removed by moderator]",
    ) -> None:
        """Initialize thread builder.

        Args:
            max_depth: Default depth bound
            deleted_placeholder: Text shown for soft-deleted comments
            removed_placeholder: Text shown for comments marked as spam
        """
        self.max_depth = max_depth
        self.deleted_placeholder = deleted_placeholder
        self.removed_placeholder = removed_placeholder

    def build(
        self,
        comments: Sequence[Comment],
        tallies: Optional[Mapping[CommentId, VoteTally]] = None,
        sort: CommentSort = CommentSort.NEWEST,
        max_depth: Optional[int] = None,
    ) -> list[CommentTreeNode]:
        """Nest comments into reply trees.

        Args:
            comments: Flat list of one article's comments, in any order
            tallies: Precomputed vote tallies (e.g. with the viewer's vote);
                missing entries are computed without a viewer
            sort: Sibling ordering
            max_depth: Depth bound (defaults to the builder's)

        Returns:
            Root nodes, sorted
        """
        limit = self.max_depth if max_depth is None else max_depth

        by_parent: dict[CommentId | None, list[Comment]] = defaultdict(list)
        for comment in comments:
            by_parent[comment.parent_id].append(comment)

        return self._build_level(by_parent, tallies or {}, None, 0, sort, limit)

    def _build_level(
        self,
        by_parent: Mapping[CommentId | None, list[Comment]],
        tallies: Mapping[CommentId, VoteTally],
        parent_id: CommentId | None,
        depth: int,
        sort: CommentSort,
        max_depth: int,
    ) -> list[CommentTreeNode]:
        if depth >= max_depth:
            return []

        nodes = []
        for comment in by_parent.get(parent_id, []):
            children = self._build_level(
                by_parent, tallies, comment.id, depth + 1, sort, max_depth
            )
            if comment.status.is_hidden and not children:
                continue

            nodes.append(
                CommentTreeNode(
                    comment=comment,
                    content=self._display_content(comment),
                    depth=depth,
                    tally=tallies.get(comment.id) or tally_for(comment),
                    children=children,
                )
            )

        return self.sort_nodes(nodes, sort)

    def _display_content(self, comment: Comment) -> str:
        if comment.status == CommentStatus.DELETED:
            return self.deleted_placeholder
        if comment.status == CommentStatus.SPAM:
            return self.removed_placeholder
        return comment.content

    @staticmethod
    def sort_nodes(
        nodes: list[CommentTreeNode], sort: CommentSort
    ) -> list[CommentTreeNode]:
        """Order sibling nodes.

        Args:
            nodes: Siblings to order
            sort: newest, oldest, or top (score, then newest first)

        Returns:
            New sorted list
        """
        if sort == CommentSort.OLDEST:
            return sorted(nodes, key=lambda n: n.comment.created_at)
        if sort == CommentSort.TOP:
            return sorted(
                nodes, key=lambda n: (n.score, n.comment.created_at), reverse=True
            )
        return sorted(nodes, key=lambda n: n.comment.created_at, reverse=True)
