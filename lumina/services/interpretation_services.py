# lumina/services/interpretation_services.py
import logging
from typing import Optional, Protocol

from lumina.core.config import Settings
from lumina.core.exceptions import BadRequest, Misconfigured, UpstreamError
from lumina.models.interpret_models import InterpretationRequest

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a warm, insightful and experienced tarot reader. "
    "You connect the cards to the querent's life with clear, grounded language. "
    "Write flowing prose without headings, lists or markdown."
)

prompt_data = {
    "question": "The querent has asked the following question:",
    "cards_drawn": "To answer it, they have drawn a three-card spread:",
    "keywords_label": "Keywords",
    "analyze_three": (
        "Write a single cohesive narrative that connects the Past, Present and Future cards, "
        "taking each card's orientation and keywords into account. "
        "Address the querent's question directly and close with a gentle piece of advice. "
        "Keep the reading under {max_words} words."
    ),
}


class TextGenerator(Protocol):
    async def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        ...


def build_interpretation_prompt(request: InterpretationRequest, max_words: int) -> str:
    """
    Build the three-card reading prompt: question, then each card by position
    with its orientation and keywords, then the narrative instructions.
    """
    prompt = (
        f"{prompt_data['question']}\n"
        f"\"{request.question.strip()}\"\n\n"
        f"{prompt_data['cards_drawn']}\n\n"
    )

    for position, card in request.cards.by_position():
        keywords = ", ".join(card.keywords) if card.keywords else "none given"
        prompt += (
            f"{position.label}: {card.name} ({card.orientation.value.capitalize()})\n"
            f"  {prompt_data['keywords_label']}: {keywords}\n"
        )

    prompt += "\n" + prompt_data["analyze_three"].format(max_words=max_words)
    return prompt


async def interpret_reading(
    request: InterpretationRequest,
    settings: Settings,
    generator: Optional[TextGenerator],
) -> str:
    """
    Produce the narrative for one reading. Stateless: one prompt, one upstream call.
    """
    if not request.question.strip():
        raise BadRequest("Invalid request: question must not be blank")

    if not settings.GEMINI_API_KEY or generator is None:
        logger.error("Interpretation requested but GEMINI_API_KEY is not configured")
        raise Misconfigured("Interpretation service is not configured")

    prompt = build_interpretation_prompt(request, settings.INTERPRETATION_MAX_WORDS)
    logger.debug(prompt)

    try:
        text = await generator.generate(prompt, system_instruction=SYSTEM_INSTRUCTION)
    except Exception as e:
        logger.error(f"Error during LLM processing: {e}", exc_info=True)
        raise UpstreamError("Failed to generate interpretation") from e

    if not text or not text.strip():
        logger.warning("LLM returned an empty interpretation")
        raise UpstreamError("Failed to generate interpretation")

    logger.info("Received full response from LLM service.")
    return text
