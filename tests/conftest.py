import random

import pytest
from fastapi.testclient import TestClient

from lumina.core.config import DEFAULT_DECK_PATH, Settings, get_settings
from lumina.core.dependencies import get_text_generator
from lumina.data.tarot import read_tarot_deck
from lumina.main import app
from lumina.models.tarot_models import Card, DrawnCard, Orientation, Position
from lumina.services.reading_services import ReadingController


class FakeGenerator:
    def __init__(self, text="The Fool's leap becomes the Sun's warmth.", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt, system_instruction=None):
        self.calls.append({"prompt": prompt, "system_instruction": system_instruction})
        if self.error:
            raise self.error
        return self.text


class FakeInterpreter:
    def __init__(self, text="Your path turns toward the light.", error=None):
        self.text = text
        self.error = error
        self.requests = []

    async def interpret(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.text


@pytest.fixture(scope="session")
def deck():
    return read_tarot_deck(DEFAULT_DECK_PATH)


@pytest.fixture
def small_deck():
    return (
        Card(serial_number=1, name="The Fool", url="fool.jpg", keywords=("beginnings", "innocence")),
        Card(serial_number=2, name="The Magician", url="magician.jpg", keywords=("manifestation",)),
        Card(serial_number=3, name="The Sun", url="sun.jpg", keywords=("positivity", "success")),
    )


@pytest.fixture
def spread(small_deck):
    return (
        DrawnCard(card=small_deck[0], orientation=Orientation.UPRIGHT, position=Position.PAST),
        DrawnCard(card=small_deck[1], orientation=Orientation.REVERSED, position=Position.PRESENT),
        DrawnCard(card=small_deck[2], orientation=Orientation.UPRIGHT, position=Position.FUTURE),
    )


@pytest.fixture
def interpreter():
    return FakeInterpreter()


@pytest.fixture
def make_controller(deck):
    def _make(interpreter, **kwargs):
        kwargs.setdefault("rng", random.Random(7))
        kwargs.setdefault("shuffle_delay", 0)
        return ReadingController(deck=kwargs.pop("deck", deck), interpreter=interpreter, **kwargs)

    return _make


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def service_settings():
    return Settings(GEMINI_API_KEY="test-key", INTERPRETATION_MAX_WORDS=200)


@pytest.fixture
def client(generator, service_settings):
    app.dependency_overrides[get_settings] = lambda: service_settings
    app.dependency_overrides[get_text_generator] = lambda: generator
    yield TestClient(app, base_url="http://localhost")
    app.dependency_overrides.clear()


@pytest.fixture
def reading_payload():
    return {
        "question": "Will I find love?",
        "cards": {
            "past": {"name": "The Fool", "orientation": "upright", "keywords": ["beginnings"]},
            "present": {"name": "The Lovers", "orientation": "reversed", "keywords": ["love", "choices"]},
            "future": {"name": "The Star", "orientation": "upright", "keywords": ["hope", "renewal"]},
        },
    }
