from abc import ABC, abstractmethod

class Visitor[T](ABC):
    """An operation over the closed node families in expr and stmt.

    Implementations dispatch on the concrete node class, usually by making
    ``visit`` a ``functools.singledispatchmethod`` and registering one
    handler per variant.
    """

    @abstractmethod
    def visit(self, visited: 'Visitable[T]') -> T:
        ...

class Visitable[T]:
    def accept(self, visitor: Visitor[T]) -> T:
        return visitor.visit(self)
