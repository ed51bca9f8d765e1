from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field


class Division(BaseModel):
    """A division row from the league's division resource."""

    model_config = ConfigDict(frozen=True)

    conference: str
    name: str
    abbreviation: str
    color1: Optional[str] = None  # hex without '#', lower-cased
    color2: Optional[str] = None
    short_label: str = ""

    @computed_field  # type: ignore[misc]
    @property
    def label(self) -> str:
        """The "{conference} {division}" label other sheets use to refer to it."""
        return f"{self.conference} {self.name}"


class Conference(BaseModel):
    """A conference, derived from the first division row that names it."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: Optional[str] = None
    time_zone: str = ""
    location: str = ""


class DivisionRef(BaseModel):
    """Canonical division fields resolved from a free-text label.

    All fields are empty when the label matched no division.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    abbreviation: str = ""
    conference: str = ""

    @classmethod
    def empty(cls) -> "DivisionRef":
        return cls()

    @classmethod
    def of(cls, division: Division) -> "DivisionRef":
        return cls(
            name=division.name,
            abbreviation=division.abbreviation,
            conference=division.conference,
        )

    @property
    def is_resolved(self) -> bool:
        return bool(self.abbreviation)

    @property
    def label(self) -> str:
        return f"{self.conference} {self.name}"
