"""
Predicate-driven search over a MIME part tree.

A single traversal serves every search: breadth-first (level order, left to
right) or depth-first (pre-order), stopping at the first match or collecting
all of them. The root part itself is visited.
"""

from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Optional

from ..models.mime_part import MIMEPart

PartMatcher = Callable[[MIMEPart], bool]


class TraversalOrder(str, Enum):
    BREADTH = "breadth"
    DEPTH = "depth"


def match_parts(
    root: MIMEPart,
    matcher: PartMatcher,
    order: TraversalOrder = TraversalOrder.BREADTH,
    first_only: bool = False,
) -> List[MIMEPart]:
    """
    Find parts of a tree accepted by a matcher.

    Args:
        root: Tree to search (included in the search)
        matcher: Predicate over a part
        order: Breadth-first or depth-first (pre-order) traversal
        first_only: Stop at the first match

    Returns:
        Matching parts in traversal order (at most one if first_only)
    """
    matches: List[MIMEPart] = []
    pending: Deque[MIMEPart] = deque([root])

    while pending:
        if order is TraversalOrder.BREADTH:
            part = pending.popleft()
            pending.extend(part.children)
        else:
            part = pending.pop()
            pending.extend(reversed(part.children))

        if matcher(part):
            matches.append(part)
            if first_only:
                break

    return matches


def breadth_match_first(root: MIMEPart, matcher: PartMatcher) -> Optional[MIMEPart]:
    matches = match_parts(root, matcher, TraversalOrder.BREADTH, first_only=True)
    return matches[0] if matches else None


def breadth_match_all(root: MIMEPart, matcher: PartMatcher) -> List[MIMEPart]:
    return match_parts(root, matcher, TraversalOrder.BREADTH)


def depth_match_all(root: MIMEPart, matcher: PartMatcher) -> List[MIMEPart]:
    return match_parts(root, matcher, TraversalOrder.DEPTH)
