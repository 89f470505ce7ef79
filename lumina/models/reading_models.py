# lumina/models/reading_models.py
"""Reading session state machine types.

Stage flow:
    LOCKED -> IDLE -> SHUFFLING -> DRAWING -> REVEALING -> INTERPRETING -> COMPLETE
                ^                                                           |
                +-------------------------- reset --------------------------+

Each stage is its own frozen dataclass carrying only the data valid in that
stage, so a reading can never hold cards before it has been shuffled or an
interpretation before all three cards are revealed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple, Union

from lumina.models.tarot_models import SPREAD_SIZE, DrawnCard


class ReadingStage(str, Enum):
    LOCKED = "locked"
    IDLE = "idle"
    SHUFFLING = "shuffling"
    DRAWING = "drawing"
    REVEALING = "revealing"
    INTERPRETING = "interpreting"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Locked:
    stage: ClassVar[ReadingStage] = ReadingStage.LOCKED

    entered_code: str = ""


@dataclass(frozen=True)
class Idle:
    stage: ClassVar[ReadingStage] = ReadingStage.IDLE


@dataclass(frozen=True)
class Shuffling:
    stage: ClassVar[ReadingStage] = ReadingStage.SHUFFLING

    question: str


@dataclass(frozen=True)
class Drawing:
    stage: ClassVar[ReadingStage] = ReadingStage.DRAWING

    question: str
    cards: Tuple[DrawnCard, ...] = ()

    def __post_init__(self):
        if len(self.cards) >= SPREAD_SIZE:
            raise ValueError(f"Drawing holds fewer than {SPREAD_SIZE} cards, got {len(self.cards)}")


@dataclass(frozen=True)
class Revealing:
    stage: ClassVar[ReadingStage] = ReadingStage.REVEALING

    question: str
    cards: Tuple[DrawnCard, ...]
    revealed: int = 0

    def __post_init__(self):
        if len(self.cards) != SPREAD_SIZE:
            raise ValueError(f"Revealing needs exactly {SPREAD_SIZE} cards, got {len(self.cards)}")
        if not 0 <= self.revealed < SPREAD_SIZE:
            raise ValueError(f"Reveal counter out of range: {self.revealed}")


@dataclass(frozen=True)
class Interpreting:
    stage: ClassVar[ReadingStage] = ReadingStage.INTERPRETING

    question: str
    cards: Tuple[DrawnCard, ...]


@dataclass(frozen=True)
class Complete:
    stage: ClassVar[ReadingStage] = ReadingStage.COMPLETE

    question: str
    cards: Tuple[DrawnCard, ...]
    interpretation: str
    used_fallback: bool = False

    def __post_init__(self):
        if not self.interpretation:
            raise ValueError("A complete reading needs an interpretation")


ReadingState = Union[Locked, Idle, Shuffling, Drawing, Revealing, Interpreting, Complete]


@dataclass(frozen=True)
class ReadingSession:
    """Flat, read-only view of the current reading for display."""

    stage: ReadingStage
    question: str = ""
    cards: Tuple[DrawnCard, ...] = ()
    reveal_count: int = 0
    interpretation: str = ""

    @classmethod
    def from_state(cls, state: ReadingState) -> "ReadingSession":
        if isinstance(state, (Locked, Idle)):
            return cls(stage=state.stage)
        if isinstance(state, Shuffling):
            return cls(stage=state.stage, question=state.question)
        if isinstance(state, Drawing):
            return cls(stage=state.stage, question=state.question, cards=state.cards)
        if isinstance(state, Revealing):
            return cls(stage=state.stage, question=state.question, cards=state.cards, reveal_count=state.revealed)
        if isinstance(state, Interpreting):
            return cls(stage=state.stage, question=state.question, cards=state.cards, reveal_count=SPREAD_SIZE)
        return cls(
            stage=state.stage,
            question=state.question,
            cards=state.cards,
            reveal_count=SPREAD_SIZE,
            interpretation=state.interpretation,
        )
