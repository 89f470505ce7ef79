# lumina/services/reading_services.py
import asyncio
import logging
import random
from typing import AbstractSet, Callable, Optional, Protocol, Sequence

from lumina.core.config import settings
from lumina.core.exceptions import ValidationError
from lumina.models.interpret_models import InterpretationRequest
from lumina.models.reading_models import (
    Complete,
    Drawing,
    Idle,
    Interpreting,
    Locked,
    ReadingSession,
    ReadingState,
    Revealing,
    Shuffling,
)
from lumina.models.tarot_models import SPREAD_SIZE, Card, DrawnCard, Orientation, Position

logger = logging.getLogger(__name__)

ACCESS_CODE_LENGTH = 6
QUESTION_MIN_LENGTH = 3
QUESTION_MAX_LENGTH = 100
FALLBACK_KEYWORD = "mystery"


class Interpreter(Protocol):
    async def interpret(self, request: InterpretationRequest) -> str:
        ...


def access_code_unlocks(code: str, target_sum: int = settings.ACCESS_CODE_SUM) -> bool:
    """True when `code` is six digits whose digit sum equals `target_sum`."""
    if len(code) != ACCESS_CODE_LENGTH or not code.isdigit():
        return False
    return sum(int(digit) for digit in code) == target_sum


def validate_question(text: str) -> str:
    question = (text or "").strip()
    if len(question) < QUESTION_MIN_LENGTH:
        raise ValidationError("question", "Please ask a question to the cards.")
    if len(question) > QUESTION_MAX_LENGTH:
        raise ValidationError("question", "Your question is too long.")
    return question


def draw_card(
    deck: Sequence[Card],
    drawn_serials: AbstractSet[int],
    position: Position,
    rng: random.Random,
) -> DrawnCard:
    """
    Draw one card uniformly from the cards not yet in the spread, with a fair-coin orientation.
    """
    candidates = [card for card in deck if card.serial_number not in drawn_serials]
    if not candidates:
        raise ValueError("No cards left in the deck to draw")

    card = rng.choice(candidates)
    orientation = rng.choice([Orientation.UPRIGHT, Orientation.REVERSED])
    return DrawnCard(card=card, orientation=orientation, position=position)


def fallback_interpretation(cards: Sequence[DrawnCard]) -> str:
    """
    Narrative used when the interpretation service cannot answer.
    Depends only on the three cards' names and first keywords.
    """
    past, present, future = cards

    def first_keyword(drawn: DrawnCard) -> str:
        return drawn.keywords[0] if drawn.keywords else FALLBACK_KEYWORD

    return (
        "The cards suggest a journey of transformation. "
        f"The {past.name} in your past indicates a foundation of {first_keyword(past)}. "
        f"Currently, the {present.name} brings energy of {first_keyword(present)}, "
        "asking you to focus on the present moment. "
        f"Looking ahead, the {future.name} reveals a potential for {first_keyword(future)} "
        "if you stay true to your path. "
        "Trust your intuition as you move forward."
    )


def format_share_text(question: str, cards: Sequence[DrawnCard], interpretation: str) -> str:
    past, present, future = cards
    return (
        "Lumina Tarot Reading\n\n"
        f"Question: {question}\n\n"
        f"Past: {past.name}\n"
        f"Present: {present.name}\n"
        f"Future: {future.name}\n\n"
        f"Interpretation:\n{interpretation}\n\n"
        "Discover your fate at Lumina Tarot."
    )


class ReadingController:
    """
    Drives one reading session from the access gate to the finished interpretation.

    Actions that are not valid in the current stage are ignored and leave the
    state untouched. The interpretation call is the only network access and
    happens exactly once, right after the third card is revealed.
    """

    def __init__(
        self,
        deck: Sequence[Card],
        interpreter: Interpreter,
        clipboard: Optional[Callable[[str], None]] = None,
        rng: Optional[random.Random] = None,
        shuffle_delay: float = settings.SHUFFLE_DELAY_SECONDS,
        access_code_sum: int = settings.ACCESS_CODE_SUM,
        on_access_denied: Optional[Callable[[], None]] = None,
        on_notice: Optional[Callable[[str], None]] = None,
        show_diagnostics: bool = not settings.is_production,
    ):
        if len(deck) < SPREAD_SIZE:
            raise ValueError(f"A reading needs at least {SPREAD_SIZE} cards, deck has {len(deck)}")

        self.deck = tuple(deck)
        self.interpreter = interpreter
        self.clipboard = clipboard
        self.rng = rng or random.Random()
        self.shuffle_delay = shuffle_delay
        self.access_code_sum = access_code_sum
        self.on_access_denied = on_access_denied
        self.on_notice = on_notice
        self.show_diagnostics = show_diagnostics
        self.state: ReadingState = Locked()

    @property
    def session(self) -> ReadingSession:
        return ReadingSession.from_state(self.state)

    def _transition(self, new_state: ReadingState):
        logger.info(f"Reading stage {self.state.stage.value} -> {new_state.stage.value}")
        self.state = new_state

    def _ignore(self, action: str):
        logger.debug(f"Ignoring {action} in stage {self.state.stage.value}")

    def unlock(self, digits: str) -> bool:
        """
        Enter digits of the access code. Digits accumulate until six have been
        entered; a full code either unlocks the reading or is rejected and cleared.
        """
        if not isinstance(self.state, Locked):
            self._ignore("unlock")
            return False

        code = self.state.entered_code + digits.strip()
        if len(code) < ACCESS_CODE_LENGTH:
            self.state = Locked(entered_code=code)
            return False

        if len(code) != ACCESS_CODE_LENGTH or not code.isdigit():
            self.state = Locked()
            raise ValidationError("access_code", f"Enter the {ACCESS_CODE_LENGTH}-digit seal code.")

        if not access_code_unlocks(code, self.access_code_sum):
            logger.info("Access code rejected")
            self.state = Locked()
            if self.on_access_denied:
                self.on_access_denied()
            return False

        self._transition(Idle())
        return True

    async def submit_question(self, text: str) -> bool:
        """
        Accept the question, shuffle for the configured delay, then open the draw.
        Raises ValidationError for a question outside 3-100 characters.
        """
        if not isinstance(self.state, Idle):
            self._ignore("question submission")
            return False

        question = validate_question(text)
        self._transition(Shuffling(question=question))
        await asyncio.sleep(self.shuffle_delay)
        self._transition(Drawing(question=question))
        return True

    def draw(self) -> Optional[DrawnCard]:
        state = self.state
        if not isinstance(state, Drawing):
            self._ignore("draw")
            return None

        drawn_serials = {drawn.serial_number for drawn in state.cards}
        position = Position.for_index(len(state.cards))
        drawn = draw_card(self.deck, drawn_serials, position, self.rng)
        logger.debug(f"Drew {drawn.name} ({drawn.orientation.value}) for {position.label}")

        cards = state.cards + (drawn,)
        if len(cards) == SPREAD_SIZE:
            self._transition(Revealing(question=state.question, cards=cards))
        else:
            self.state = Drawing(question=state.question, cards=cards)
        return drawn

    async def reveal(self, index: Optional[int] = None) -> bool:
        """
        Flip the next face-down card. Only the card at the reveal counter may be
        flipped; flipping the third one requests the interpretation.
        """
        state = self.state
        if not isinstance(state, Revealing):
            self._ignore("reveal")
            return False
        if index is not None and index != state.revealed:
            self._ignore(f"reveal of card {index}")
            return False

        revealed = state.revealed + 1
        if revealed < SPREAD_SIZE:
            self.state = Revealing(question=state.question, cards=state.cards, revealed=revealed)
            return True

        self._transition(Interpreting(question=state.question, cards=state.cards))
        await self._interpret()
        return True

    async def _interpret(self):
        state = self.state
        try:
            request = InterpretationRequest.from_drawn_cards(state.question, state.cards)
            interpretation = await self.interpreter.interpret(request)
            if not interpretation or not interpretation.strip():
                raise ValueError("empty interpretation")
            complete = Complete(question=state.question, cards=state.cards, interpretation=interpretation)
        except Exception as e:
            logger.warning(f"Falling back to local interpretation: {e}", exc_info=True)
            complete = Complete(
                question=state.question,
                cards=state.cards,
                interpretation=fallback_interpretation(state.cards),
                used_fallback=True,
            )
            if self.show_diagnostics and self.on_notice:
                self.on_notice(f"Using local interpretation (service unavailable: {e})")
        self._transition(complete)

    def share(self) -> Optional[str]:
        """
        Copy the finished reading to the clipboard and return the shared text.
        """
        state = self.state
        if not isinstance(state, Complete):
            self._ignore("share")
            return None

        text = format_share_text(state.question, state.cards, state.interpretation)
        if self.clipboard:
            self.clipboard(text)
        return text

    def reset(self) -> bool:
        """Start over with a new question. The access gate stays open."""
        if not isinstance(self.state, Complete):
            self._ignore("reset")
            return False
        self._transition(Idle())
        return True
