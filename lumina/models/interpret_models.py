# lumina/models/interpret_models.py
from typing import List, Sequence

from pydantic import BaseModel, Field

from lumina.models.tarot_models import DrawnCard, Orientation, Position


class CardPayload(BaseModel):
    name: str = Field(min_length=1)
    orientation: Orientation
    keywords: List[str]


class SpreadPayload(BaseModel):
    past: CardPayload
    present: CardPayload
    future: CardPayload

    def by_position(self) -> List[tuple[Position, CardPayload]]:
        return [
            (Position.PAST, self.past),
            (Position.PRESENT, self.present),
            (Position.FUTURE, self.future),
        ]


class InterpretationRequest(BaseModel):
    question: str = Field(min_length=1)
    cards: SpreadPayload

    @classmethod
    def from_drawn_cards(cls, question: str, cards: Sequence[DrawnCard]) -> "InterpretationRequest":
        spread = {
            drawn.position.value: CardPayload(
                name=drawn.name,
                orientation=drawn.orientation,
                keywords=list(drawn.keywords),
            )
            for drawn in cards
        }
        return cls(question=question, cards=SpreadPayload(**spread))


class InterpretationResponse(BaseModel):
    interpretation: str


class ErrorResponse(BaseModel):
    error: str
