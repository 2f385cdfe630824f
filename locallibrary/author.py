from __future__ import annotations

from datetime import date

from locallibrary.dates import format_date, iso_date, parse_stored_date


class Author:
    """A single author in the catalog."""

    def __init__(self, first_name: str, family_name: str, date_of_birth: date | None = None,
                 date_of_death: date | None = None, id: int | None = None) -> None:
        self.id = id
        self.first_name = first_name.strip()
        self.family_name = family_name.strip()
        self.date_of_birth = date_of_birth
        self.date_of_death = date_of_death

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return self.name

    @property
    def name(self) -> str:
        """Full name as 'family_name, first_name'; empty unless both are set."""
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    @property
    def date_of_birth_formatted(self) -> str:
        return format_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_date(self.date_of_death)

    @property
    def lifespan(self) -> str:
        if not self.date_of_birth and not self.date_of_death:
            return ""
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}".strip()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "family_name": self.family_name,
            "date_of_birth": iso_date(self.date_of_birth) or None,
            "date_of_death": iso_date(self.date_of_death) or None,
        }

    @staticmethod
    def from_dict(data: dict) -> "Author":
        return Author(
            id=data.get("id"),
            first_name=data["first_name"],
            family_name=data["family_name"],
            date_of_birth=parse_stored_date(data.get("date_of_birth")),
            date_of_death=parse_stored_date(data.get("date_of_death")),
        )
