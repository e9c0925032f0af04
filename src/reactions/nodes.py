"""Reaction and decay trees.

A tree is made of nodes: elements are the leaves, while `Reaction` and
`Decay` objects are the composite nodes. Reactants and products are kept in
the order in which they were given, but this order is ignored when comparing
trees, so that

>>> from reactions import make_reaction
>>> first = make_reaction("A B -> C {D -> E F}")
>>> first == make_reaction("B A -> {D -> F E} C")
True
"""

from enum import Enum
from typing import Any, List, Optional, Sequence, Union

import attr

from reactions.elements import Element, ElementKind, to_element_kind


class NodeKind(Enum):
    ELEMENT = "element"
    REACTION = "reaction"
    DECAY = "decay"


def is_element(obj: Any) -> bool:
    return isinstance(obj, Element)


def node_type(obj: Any) -> NodeKind:
    if isinstance(obj, Element):
        return NodeKind.ELEMENT
    if isinstance(obj, Reaction):
        return NodeKind.REACTION
    if isinstance(obj, Decay):
        return NodeKind.DECAY
    raise TypeError(
        f"Objects of type {obj.__class__.__name__} are not nodes of a "
        "reaction or decay tree"
    )


def _check_kinds(first: "_CompositeNode", second: "_CompositeNode") -> None:
    if first.kind is not second.kind:
        raise TypeError(
            f"Can not compare a tree of {first.kind.value} elements with a "
            f"tree of {second.kind.value} elements"
        )


def _nodes_equal(first: Any, second: Any) -> bool:
    first_type = node_type(first)
    if first_type is not node_type(second):
        return False
    return first == second


def _find_match(
    row: int,
    adjacency: Sequence[Sequence[bool]],
    matched_rows: List[Optional[int]],
    visited: List[bool],
) -> bool:
    for column, is_equal in enumerate(adjacency[row]):
        if not is_equal or visited[column]:
            continue
        visited[column] = True
        previous = matched_rows[column]
        if previous is None or _find_match(
            previous, adjacency, matched_rows, visited
        ):
            matched_rows[column] = row
            return True
    return False


def multiset_equal(first: Sequence[Any], second: Sequence[Any]) -> bool:
    """Compare two collections of nodes, ignoring their order.

    Every node of one collection must be paired with an equal and different
    node of the other. Pairs are found through augmenting paths on the graph
    of equal nodes (maximum bipartite matching), so repeated nodes are never
    matched twice.
    """
    if len(first) != len(second):
        return False
    adjacency = [[_nodes_equal(a, b) for b in second] for a in first]
    matched_rows: List[Optional[int]] = [None] * len(second)
    for row in range(len(first)):
        visited = [False] * len(second)
        if not _find_match(row, adjacency, matched_rows, visited):
            return False
    return True


def _node_to_str(node: Any) -> str:
    if is_element(node):
        return str(node)
    return f"{{{node}}}"


class _CompositeNode:
    kind: ElementKind

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore


@attr.s(eq=False)
class Reaction(_CompositeNode):
    """Set of reactants that produce a set of products.

    Both reactants and products can be elements or other reactions.
    """

    reactants: List[Union[Element, "Reaction"]] = attr.ib(
        factory=list, converter=list
    )
    products: List[Union[Element, "Reaction"]] = attr.ib(
        factory=list, converter=list
    )
    kind: ElementKind = attr.ib(
        default=ElementKind.STRING, converter=to_element_kind
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _CompositeNode):
            return NotImplemented
        _check_kinds(self, other)
        if not isinstance(other, Reaction):
            return False
        return multiset_equal(
            self.reactants, other.reactants
        ) and multiset_equal(self.products, other.products)

    def __str__(self) -> str:
        reactants = " ".join(_node_to_str(n) for n in self.reactants)
        products = " ".join(_node_to_str(n) for n in self.products)
        return f"{reactants} -> {products}"


@attr.s(eq=False)
class Decay(_CompositeNode):
    """Element that decays into a set of products.

    Products can be elements or other decays.
    """

    head: Optional[Element] = attr.ib(default=None)
    products: List[Union[Element, "Decay"]] = attr.ib(
        factory=list, converter=list
    )
    kind: ElementKind = attr.ib(
        default=ElementKind.STRING, converter=to_element_kind
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _CompositeNode):
            return NotImplemented
        _check_kinds(self, other)
        if not isinstance(other, Decay):
            return False
        if self.head is None or other.head is None:
            if self.head is not other.head:
                return False
        elif self.head != other.head:
            return False
        return multiset_equal(self.products, other.products)

    def __str__(self) -> str:
        head = "" if self.head is None else str(self.head)
        products = " ".join(_node_to_str(n) for n in self.products)
        return f"{head} -> {products}"
