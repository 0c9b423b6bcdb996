"""
Evaluation context for XPath expressions.
"""

from typing import Any, Iterable, List


class Context:
    """
    The node-set an expression is evaluated against.

    The expression is evaluated once per node, with the node's position and
    the size of the set as the context position and size.
    """

    def __init__(self, node_set: Iterable[Any]):
        self.node_set: List[Any] = list(node_set)

    @property
    def node(self) -> Any:
        """The first node of the set, or None."""
        return self.node_set[0] if self.node_set else None

    @property
    def size(self) -> int:
        return len(self.node_set)

    def __repr__(self) -> str:
        return f"Context(size={self.size})"
