from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from storefront import llm_logic
from storefront import main as storefront_main
from storefront.constants import seed_products
from storefront.models import AppState, Category, Product


@pytest.fixture
def product_a():
    return Product(
        id="A",
        name="Velocity Runner X1",
        brand="Kenya-Amazon",
        price=145.0,
        sizes=[8, 9, 10],
        category=Category.RUNNING,
        rating=4.8,
        reviews=0,
    )


@pytest.fixture
def product_b():
    return Product(
        id="B",
        name="Court Master Pro",
        brand="Kenya-Amazon",
        price=60.0,
        sizes=[9, 10, 11],
        category=Category.BASKETBALL,
        rating=4.9,
        reviews=0,
    )


@pytest.fixture
def client(monkeypatch, tmp_path):
    monkeypatch.setattr(storefront_main, "CHECKOUT_DELAY_SECONDS", 0)
    monkeypatch.setattr(storefront_main, "RECEIPTS_DIR", str(tmp_path))
    storefront_main.app.state.store = AppState(products=seed_products())
    with TestClient(storefront_main.app) as c:
        yield c


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def fake_openai(monkeypatch):
    """
    Replace the OpenAI client. Configure the returned namespace:
      fake.chat_content = "..."          -> chat completion text
      fake.image_data = [SimpleNamespace(b64_json=..., url=...)]
      fake.error = SomeOpenAIError(...)  -> raised by every call
    Calls are recorded in fake.calls.
    """
    fake = SimpleNamespace(chat_content="", image_data=[], error=None, calls=[])

    def create(**kwargs):
        fake.calls.append(("chat", kwargs))
        if fake.error:
            raise fake.error
        return _completion(fake.chat_content)

    def generate(**kwargs):
        fake.calls.append(("image", kwargs))
        if fake.error:
            raise fake.error
        return SimpleNamespace(data=fake.image_data)

    client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create)),
        images=SimpleNamespace(generate=generate),
    )
    monkeypatch.setattr(llm_logic, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(llm_logic, "OpenAI", lambda api_key: client)
    return fake
