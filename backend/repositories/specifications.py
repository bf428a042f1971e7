"""
Specification Pattern Implementation

Encapsulates query criteria in small composable objects. Each specification
can both evaluate an in-memory candidate and render itself as a SQLAlchemy
filter expression, so the same rule is testable without a database.
"""

from abc import ABC, abstractmethod
from functools import reduce
from typing import Generic, Iterable, TypeVar
from sqlalchemy import and_, or_, not_, true


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """
    Abstract base class for specifications.

    A specification encapsulates a single query criterion.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check if a candidate object satisfies this specification.

        Args:
            candidate: Object to check

        Returns:
            True if candidate satisfies specification
        """
        pass

    @abstractmethod
    def to_sql_filter(self):
        """
        Convert specification to SQLAlchemy filter expression.

        Returns:
            SQLAlchemy filter expression
        """
        pass

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        """Combine specifications with AND."""
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "OrSpecification[T]":
        """Combine specifications with OR."""
        return OrSpecification(self, other)

    def __invert__(self) -> "NotSpecification[T]":
        """Negate specification with NOT."""
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Specification that combines two specifications with AND."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate satisfies both specifications."""
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        """Convert to SQL AND filter."""
        return and_(self.left.to_sql_filter(), self.right.to_sql_filter())


class OrSpecification(Specification[T]):
    """Specification that combines two specifications with OR."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate satisfies either specification."""
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        """Convert to SQL OR filter."""
        return or_(self.left.to_sql_filter(), self.right.to_sql_filter())


class NotSpecification(Specification[T]):
    """Specification that negates another specification."""

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate does NOT satisfy specification."""
        return not self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self):
        """Convert to SQL NOT filter."""
        return not_(self.spec.to_sql_filter())


class MatchAllSpecification(Specification[T]):
    """Specification without any constraint; every candidate matches."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return True

    def to_sql_filter(self):
        return true()


def all_of(specs: Iterable[Specification[T]]) -> Specification[T]:
    """
    AND-combine a sequence of specifications.

    An empty sequence yields ``MatchAllSpecification``.
    """
    specs = list(specs)
    if not specs:
        return MatchAllSpecification()
    return reduce(lambda left, right: left & right, specs)
