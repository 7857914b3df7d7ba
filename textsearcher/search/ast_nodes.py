"""Data classes for structured keyword queries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from textsearcher.exceptions import EmptyOrGroupError, InvalidLiteralError


def _check_literal(value: object) -> str:
    if not isinstance(value, str):
        raise InvalidLiteralError(value, "literal must be a string")
    if not value.strip():
        raise InvalidLiteralError(value)
    return value


@dataclass(frozen=True)
class Literal:
    """A keyword or phrase. Internal whitespace is a soft separator."""

    value: str

    def __post_init__(self) -> None:
        _check_literal(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrGroup:
    """A group of alternative literals.

    The group is satisfied when any one of its literals occurs in the
    document. Member order carries no meaning.
    """

    literals: tuple[Literal, ...] = ()

    def __post_init__(self) -> None:
        if not self.literals:
            raise EmptyOrGroupError()


@dataclass(frozen=True)
class QuerySpec:
    """Top-level query: a primary literal AND-ed with every OR-group."""

    primary: Literal
    groups: tuple[OrGroup, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for index, group in enumerate(self.groups):
            if not group.literals:
                raise EmptyOrGroupError(index)

    @classmethod
    def from_atoms(
        cls,
        primary_atom: str,
        and_of_or_atoms: Iterable[Iterable[str]] = (),
    ) -> QuerySpec:
        """Build a QuerySpec from plain strings.

        Args:
            primary_atom: Literal that every matching document must contain.
            and_of_or_atoms: One sequence of alternatives per OR-group.

        Raises:
            InvalidLiteralError: If any literal is empty or whitespace-only.
            EmptyOrGroupError: If any OR-group has no literals.
        """
        if isinstance(and_of_or_atoms, str):
            raise InvalidLiteralError(and_of_or_atoms, "OR-groups must be sequences of strings")

        primary = Literal(primary_atom)
        groups: list[OrGroup] = []
        for index, atoms in enumerate(and_of_or_atoms):
            if isinstance(atoms, str):
                raise InvalidLiteralError(atoms, "OR-group must be a sequence of strings")
            literals = tuple(Literal(atom) for atom in atoms)
            if not literals:
                raise EmptyOrGroupError(index)
            groups.append(OrGroup(literals))
        return cls(primary=primary, groups=tuple(groups))

    def to_atoms(self) -> tuple[str, list[list[str]]]:
        """Return the query as ``(primary, [[alternatives], ...])``."""
        return (
            self.primary.value,
            [[lit.value for lit in group.literals] for group in self.groups],
        )
