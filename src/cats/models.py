"""Cat record model and its list projection."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

OPTIONAL_FIELDS = ("color", "favourite_food", "owner")


def parse_birth_date(text: str) -> date:
    """Turn a pattern-checked yyyy-mm-dd string into a date.

    Days past the end of the month roll into the next month
    (2021-02-30 is 2021-03-02). Year 0000 becomes 0001, the earliest
    year a date can hold.
    """
    year, month, day = (int(part) for part in text.split("-"))
    first = date(max(year, 1), month, 1)
    return first + timedelta(days=day - 1)


@dataclass
class Cat:
    id: int
    name: Any
    birth_date: date
    color: Any = None
    favourite_food: Any = None
    owner: Any = None

    @classmethod
    def from_payload(cls, cat_id: int, payload: dict) -> "Cat":
        """Build a cat from a validated request payload. Unknown keys are dropped."""
        return cls(
            id=cat_id,
            name=payload["name"],
            birth_date=parse_birth_date(payload["birth_date"]),
            color=payload.get("color"),
            favourite_food=payload.get("favourite_food"),
            owner=payload.get("owner"),
        )

    def to_dict(self) -> dict:
        """Response shape: unset optional fields are left out and birth_date
        is a UTC midnight timestamp (2020-07-01T00:00:00.000Z)."""
        data = {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "birth_date": f"{self.birth_date.isoformat()}T00:00:00.000Z",
            "favourite_food": self.favourite_food,
            "owner": self.owner,
        }
        return {k: v for k, v in data.items() if k not in OPTIONAL_FIELDS or v is not None}


@dataclass
class CatListItem:
    id: int
    name: Any

    @classmethod
    def from_cat(cls, cat: Cat) -> "CatListItem":
        return cls(id=cat.id, name=cat.name)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


SEED_CATS: list[Cat] = [
    Cat(id=1, name="Wulfgar", color="Grey", birth_date=date(2020, 7, 1),
        favourite_food="Tuna", owner="Kira"),
    Cat(id=2, name="Teddy", color="Spotted", birth_date=date(2014, 3, 4),
        favourite_food="Kibble", owner="Maddie"),
]
