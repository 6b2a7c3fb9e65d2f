"""Enums for model fields and query options."""

from enum import Enum


class PetitionSort(str, Enum):
    """Orderings accepted by the petition search."""

    ALPHABETICAL_ASC = "ALPHABETICAL_ASC"
    ALPHABETICAL_DESC = "ALPHABETICAL_DESC"
    COST_ASC = "COST_ASC"
    COST_DESC = "COST_DESC"
    CREATED_ASC = "CREATED_ASC"
    CREATED_DESC = "CREATED_DESC"

    @classmethod
    def parse(cls, value: str | None) -> "PetitionSort":
        """Map a raw query value to a sort, falling back to oldest first."""
        if value:
            try:
                return cls(value.upper())
            except ValueError:
                pass
        return cls.CREATED_ASC
