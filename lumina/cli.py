# lumina/cli.py
import asyncio
import logging

import pyperclip

from lumina.core.config import configure_logging, settings
from lumina.core.exceptions import ValidationError
from lumina.data.tarot import read_tarot_deck
from lumina.models.reading_models import ReadingStage
from lumina.models.tarot_models import DrawnCard, Orientation, Position
from lumina.services.interpret_client import InterpretationClient
from lumina.services.reading_services import ReadingController, format_share_text, validate_question

logger = logging.getLogger(__name__)


def print_card(drawn: DrawnCard):
    print(f"\n{drawn.position.label}")
    print(f"Name: {drawn.name} ({drawn.orientation.value.capitalize()})")
    print(f"Keywords: {', '.join(drawn.keywords)}")
    print(f"Image: {drawn.card.url}{' (shown upside down)' if drawn.orientation == Orientation.REVERSED else ''}")


def print_interpretation(text: str):
    print(f"\n{'-' * 40}")
    print("The Oracle Speaks")
    print(f"{'-' * 40}\n")
    print(text)
    print()


def copy_to_clipboard(text: str):
    pyperclip.copy(text)


def unlock(controller: ReadingController):
    print("Sanctum Access")
    print('Enter the 6-digit seal code to enter. "The sum of the parts reveals the path."')
    while controller.session.stage == ReadingStage.LOCKED:
        code = input(f"Seal code: {controller.state.entered_code}")
        try:
            controller.unlock(code)
        except ValidationError as e:
            print(e.message)


async def ask_question(controller: ReadingController):
    while controller.session.stage == ReadingStage.IDLE:
        question = input("\nWhat does the universe hold for you? ")
        try:
            validate_question(question)
        except ValidationError as e:
            print(e.message)
            continue
        print("Shuffling the cards...")
        await controller.submit_question(question)


async def draw_and_reveal(controller: ReadingController):
    print("\nDraw your cards")
    while controller.session.stage == ReadingStage.DRAWING:
        count = len(controller.session.cards)
        input(f"Press Enter to draw card {count + 1}/3 ({Position.for_index(count).label})")
        controller.draw()

    while controller.session.stage == ReadingStage.REVEALING:
        index = controller.session.reveal_count
        input(f"\nPress Enter to reveal {Position.for_index(index).label}")
        print_card(controller.session.cards[index])
        if index == len(controller.session.cards) - 1:
            print("Consulting the oracle...")
        await controller.reveal(index)


def share(controller: ReadingController):
    try:
        controller.share()
    except pyperclip.PyperclipException as e:
        logger.warning(f"Clipboard unavailable: {e}")
        session = controller.session
        print("Clipboard unavailable, here is your reading:\n")
        print(format_share_text(session.question, session.cards, session.interpretation))
        return
    print("Copied to clipboard. Your reading is ready to share.")


async def run_reading(controller: ReadingController):
    unlock(controller)

    while True:
        await ask_question(controller)
        await draw_and_reveal(controller)
        print_interpretation(controller.session.interpretation)

        while True:
            choice = input("1. Share reading  2. Ask another question  3. Quit\nEnter your choice (1/2/3): ").strip()
            if choice == "1":
                share(controller)
            elif choice == "2":
                controller.reset()
                break
            elif choice == "3":
                return
            else:
                print("Invalid choice.")


def main():
    configure_logging(settings.DEBUG)

    print("Welcome to Lumina Tarot!")
    print("Unveil the threads of fate weaving your Past, Present, and Future.\n")

    controller = ReadingController(
        deck=read_tarot_deck(settings.DECK_PATH),
        interpreter=InterpretationClient(),
        clipboard=copy_to_clipboard,
        on_access_denied=lambda: print("The seal holds. Try again."),
        on_notice=lambda message: print(f"[dev] {message}"),
    )

    try:
        asyncio.run(run_reading(controller))
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
