"""Copy-on-write transforms over the comment forest.

Every function returns a new forest and leaves its input untouched, so a
forest held elsewhere (e.g. by a render in progress) stays valid. Only the
path from the root to the changed node is rebuilt; all other subtrees are
shared. A transform whose target id is not in the forest returns the input
forest itself.
"""

from collections.abc import Callable, Iterator

from discuss.domain.model.comment import CommentForest, CommentNode
from discuss.domain.value import CommentId


def iter_comments(forest: CommentForest) -> Iterator[CommentNode]:
    """Yield every node, depth first, in display order."""
    for node in forest:
        yield node
        yield from iter_comments(node.children)


def find_comment(forest: CommentForest, comment_id: CommentId) -> CommentNode | None:
    """Find a node at any depth."""
    return next((node for node in iter_comments(forest) if node.id == comment_id), None)


def count_comments(forest: CommentForest) -> int:
    """Count all nodes in the forest."""
    return sum(1 for _ in iter_comments(forest))


def update_comment(
    forest: CommentForest,
    comment_id: CommentId,
    change: Callable[[CommentNode], CommentNode],
) -> CommentForest:
    """Replace the node with `comment_id` by `change(node)`."""
    rebuilt: list[CommentNode] = []
    changed = False
    for node in forest:
        if node.id == comment_id:
            node = change(node)
            changed = True
        elif node.children:
            children = update_comment(node.children, comment_id, change)
            if children is not node.children:
                node = node.model_copy(update={"children": children})
                changed = True
        rebuilt.append(node)
    return tuple(rebuilt) if changed else forest


def remove_comment(forest: CommentForest, comment_id: CommentId) -> CommentForest:
    """Excise a node together with its whole subtree."""
    rebuilt: list[CommentNode] = []
    changed = False
    for node in forest:
        if node.id == comment_id:
            changed = True
            continue
        if node.children:
            children = remove_comment(node.children, comment_id)
            if children is not node.children:
                node = node.model_copy(update={"children": children})
                changed = True
        rebuilt.append(node)
    return tuple(rebuilt) if changed else forest


def toggle_like_in_tree(forest: CommentForest, comment_id: CommentId) -> CommentForest:
    """Flip `is_liked` and move `like_count` by one in the same direction.

    Nodes always count their own like, so flipping twice restores the node.
    """

    def toggle(node: CommentNode) -> CommentNode:
        delta = -1 if node.is_liked else 1
        return node.model_copy(
            update={
                "is_liked": not node.is_liked,
                "like_count": node.like_count + delta,
            }
        )

    return update_comment(forest, comment_id, toggle)


def set_text_in_tree(
    forest: CommentForest, comment_id: CommentId, text: str
) -> CommentForest:
    """Overwrite the raw text of one node."""
    return update_comment(
        forest, comment_id, lambda node: node.model_copy(update={"raw_text": text})
    )


def append_reply(
    forest: CommentForest, parent_id: CommentId, reply: CommentNode
) -> CommentForest:
    """Add `reply` as the last child of `parent_id`."""
    return update_comment(
        forest,
        parent_id,
        lambda node: node.model_copy(update={"children": (*node.children, reply)}),
    )


def prepend_comment(forest: CommentForest, comment: CommentNode) -> CommentForest:
    """Add a new top-level comment in front of the existing ones."""
    return (comment, *forest)


def replace_comment(
    forest: CommentForest, comment_id: CommentId, replacement: CommentNode
) -> CommentForest:
    """Swap a node for `replacement` at the same position."""
    return update_comment(forest, comment_id, lambda _: replacement)
