# lumina/models/tarot_models.py
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Orientation(str, Enum):
    UPRIGHT = "upright"
    REVERSED = "reversed"


class Position(str, Enum):
    PAST = "past"
    PRESENT = "present"
    FUTURE = "future"

    @property
    def label(self) -> str:
        return f"The {self.value.capitalize()}"

    @classmethod
    def for_index(cls, index: int) -> "Position":
        """Position of the card drawn at `index` (0 -> Past, 1 -> Present, 2 -> Future)."""
        return SPREAD_POSITIONS[index]


SPREAD_POSITIONS = (Position.PAST, Position.PRESENT, Position.FUTURE)
SPREAD_SIZE = len(SPREAD_POSITIONS)


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    serial_number: int
    name: str = Field(min_length=1)
    url: str
    keywords: Tuple[str, ...] = ()


class DrawnCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    card: Card
    orientation: Orientation
    position: Position

    @property
    def name(self) -> str:
        return self.card.name

    @property
    def serial_number(self) -> int:
        return self.card.serial_number

    @property
    def keywords(self) -> Tuple[str, ...]:
        return self.card.keywords
