import json
import logging
from typing import Tuple

from lumina.models.tarot_models import Card

logger = logging.getLogger(__name__)


def read_tarot_deck(filepath) -> Tuple[Card, ...]:
    """
    Read the deck JSON file into an immutable tuple of cards.
    Serial numbers must be unique within the deck.
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    cards = tuple(Card(**card) for card in data["cards"])

    serials = {card.serial_number for card in cards}
    if len(serials) != len(cards):
        raise ValueError(f"Duplicate serial numbers in tarot deck {filepath}")

    logger.info(f"Loaded {len(cards)} tarot cards from {filepath}")
    return cards
