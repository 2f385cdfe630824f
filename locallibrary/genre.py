from __future__ import annotations


class Genre:
    """A book category, e.g. 'Fantasy'."""

    def __init__(self, name: str, id: int | None = None) -> None:
        self.id = id
        self.name = name.strip()

    def __str__(self) -> str:
        return self.name

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"

    @staticmethod
    def from_dict(data: dict) -> "Genre":
        return Genre(id=data.get("id"), name=data["name"])
