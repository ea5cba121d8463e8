"""Visitor support for ComposeTree.

Two families live here:

* Element visitors: a closed set of element kinds (ElementKind) that each
  route ``accept`` to the visitor method for their kind. New operations are
  new Visitor subclasses; a new element kind means a new abstract method on
  Visitor, which every existing visitor must then implement before it can
  be instantiated.
* Component visitors: the same idea over the Leaf/Composite node shapes,
  for operations on component trees that live outside the node classes.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Type, Union

from .core.node import Component, Composite, Leaf
from .errors import UnknownKindError

logger = logging.getLogger(__name__)


class ElementKind(Enum):
    """The closed set of element kinds."""
    A = "a"
    B = "b"


class Element(ABC):
    """An object that can be handed to a Visitor."""

    kind: ElementKind

    def accept(self, visitor: 'Visitor') -> Any:
        """Call the visitor method that matches this element's kind."""
        return visitor.visit(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ElementA(Element):
    kind = ElementKind.A

    def exclusive_method(self) -> str:
        return "A"


class ElementB(Element):
    kind = ElementKind.B

    def special_method(self) -> str:
        return "B"


class Visitor(ABC):
    """Declares one visit operation per element kind."""

    @abstractmethod
    def visit_element_a(self, element: ElementA) -> Any:
        pass

    @abstractmethod
    def visit_element_b(self, element: ElementB) -> Any:
        pass

    def visit(self, element: Element) -> Any:
        """Dispatch to the visit method for ``element.kind``.

        Raises:
            UnknownKindError: If the element carries a kind with no handler
        """
        dispatch: Dict[ElementKind, Callable[[Any], Any]] = {
            ElementKind.A: self.visit_element_a,
            ElementKind.B: self.visit_element_b,
        }
        kind = getattr(element, "kind", None)
        if kind not in dispatch:
            raise UnknownKindError(
                f"{self.__class__.__name__} has no handler for element kind {kind!r}"
            )
        return dispatch[kind](element)

    def __str__(self) -> str:
        return self.__class__.__name__


class ConcreteVisitorX(Visitor):
    def visit_element_a(self, element: ElementA) -> str:
        return f"{element.exclusive_method()} + {self}"

    def visit_element_b(self, element: ElementB) -> str:
        return f"{element.special_method()} + {self}"


class ConcreteVisitorY(Visitor):
    def visit_element_a(self, element: ElementA) -> str:
        return f"{element.exclusive_method()} + {self}"

    def visit_element_b(self, element: ElementB) -> str:
        return f"{element.special_method()} + {self}"


# Factories

_ELEMENTS: Dict[ElementKind, Type[Element]] = {
    ElementKind.A: ElementA,
    ElementKind.B: ElementB,
}

_VISITORS: Dict[str, Type[Visitor]] = {
    'x': ConcreteVisitorX,
    'concretevisitorx': ConcreteVisitorX,
    'y': ConcreteVisitorY,
    'concretevisitory': ConcreteVisitorY,
}


def create_element(kind: Union[ElementKind, str]) -> Element:
    """Create an element by kind.

    Args:
        kind: An ElementKind or its value ("a", "b"), case-insensitive

    Raises:
        UnknownKindError: If kind is not recognized
    """
    if not isinstance(kind, ElementKind):
        try:
            kind = ElementKind(str(kind).lower())
        except ValueError:
            raise UnknownKindError(
                f"Unknown element kind: {kind!r}. "
                f"Choose from: {', '.join(k.value for k in ElementKind)}"
            ) from None
    return _ELEMENTS[kind]()


def create_visitor(name: str) -> Visitor:
    """Create a visitor by name ("x", "y" or the full class name).

    Raises:
        UnknownKindError: If name is not recognized
    """
    key = name.lower()
    if key not in _VISITORS:
        raise UnknownKindError(
            f"Unknown visitor: {name!r}. Choose from: {', '.join(_VISITORS.keys())}"
        )
    return _VISITORS[key]()


# Component visitors

class ComponentVisitor(ABC):
    """Declares one visit operation per node shape."""

    @abstractmethod
    def visit_leaf(self, leaf: Leaf) -> Any:
        pass

    @abstractmethod
    def visit_composite(self, composite: Composite) -> Any:
        pass

    def visit(self, node: Component) -> Any:
        return node.accept(self)


class RenderVisitor(ComponentVisitor):
    """Renders a component tree the same way Component.operation() does."""

    def visit_leaf(self, leaf: Leaf) -> str:
        label = leaf.label
        return leaf.arena.render.leaf_label if label is None else label

    def visit_composite(self, composite: Composite) -> str:
        parts = [child.accept(self) for child in composite.children()]
        return composite.arena.render.wrap(parts, label=composite.label)


class LeafCountVisitor(ComponentVisitor):
    """Counts the leaves reachable from a node."""

    def visit_leaf(self, leaf: Leaf) -> int:
        return 1

    def visit_composite(self, composite: Composite) -> int:
        return sum(child.accept(self) for child in composite.children())
