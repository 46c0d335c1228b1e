# Filename: storefront/llm_logic.py
# All calls to the OpenAI API live here:
#  - generate_sneaker_image(): product shot for the design studio, returned as a data URL
#  - generate_market_analysis(): short trend write-up for the admin dashboard
#  - generate_campaign_offers(): price suggestions for a campaign theme
# Every failure (no key, network, refusal, empty or malformed payload) is raised as
# GenerationError. Nothing is retried here; the user re-issues the action.

from __future__ import annotations

import json
import logging
from typing import List, Sequence

import requests
from decouple import config
from openai import OpenAI, OpenAIError
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from storefront.errors import GenerationError, ValidationError
from storefront.models import Category, ImageSize, OfferSuggestion, Product
from storefront.utils import b64_to_data_url, download_image_as_data_url

logger = logging.getLogger(__name__)

OPENAI_API_KEY = config("OPENAI_API_KEY", default="")
OPENAI_TEXT_MODEL = config("OPENAI_TEXT_MODEL", default="gpt-4o-mini")
OPENAI_IMAGE_MODEL = config("OPENAI_IMAGE_MODEL", default="gpt-image-1")

_OPENAI_TEMP = 0.4
_ANALYSIS_MAX_TOKENS = 400
_OFFERS_MAX_TOKENS = 800

# square canvas; the tier only changes rendering quality
_IMAGE_CANVAS = "1024x1024"
_IMAGE_QUALITY = {
    ImageSize.ONE_K: "low",
    ImageSize.TWO_K: "medium",
    ImageSize.FOUR_K: "high",
}

_IMAGE_PROMPT = (
    "A professional, high-quality product photography shot of a sneaker. {prompt}. "
    "Clean white background, studio lighting."
)

_SYS_PROMPT_ANALYST = (
    "You are a retail analyst for Kenya-Amazon, a sneaker store. "
    "Write a short market analysis (3-5 sentences) of current demand and pricing trends "
    "for the given sneaker categories. Plain text, no lists, no markdown."
)

_SYS_PROMPT_OFFERS = (
    "You are a pricing assistant for Kenya-Amazon, a sneaker store. "
    "Given a catalog snapshot and a campaign theme, propose discounted prices for the products "
    "that fit the theme. Never suggest a price above the current price. "
    'Reply with ONLY strict JSON of the form {"suggestions": '
    '[{"productId": "<id>", "suggestedPrice": <number>, "reasoning": "<one sentence>"}]}. '
    "No extra text, no '```', no 'json:' prefix."
)

_SUGGESTIONS = TypeAdapter(List[OfferSuggestion])


def _new_client() -> OpenAI:
    """Client built right before each call so a key set after startup is picked up."""
    if not OPENAI_API_KEY:
        raise GenerationError("OPENAI_API_KEY is not configured")
    return OpenAI(api_key=OPENAI_API_KEY)


def _chat(system: str, user: str, *, max_tokens: int, json_mode: bool = False) -> str:
    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    try:
        completion = _new_client().chat.completions.create(
            model=OPENAI_TEXT_MODEL,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            temperature=_OPENAI_TEMP,
            **kwargs,
        )
    except OpenAIError as e:
        logger.error(f"[LLM fail] {type(e).__name__}: {e}")
        raise GenerationError(f"Generation service error: {e}") from e

    if not completion.choices:
        raise GenerationError("Generation service returned no choices")
    return (completion.choices[0].message.content or "").strip()


# ---------------- Images ----------------
def generate_sneaker_image(prompt: str, size: ImageSize = ImageSize.ONE_K) -> str:
    """Render a sneaker product shot for `prompt`. Returns a data URL."""
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValidationError("Describe the sneaker you want to generate")

    try:
        response = _new_client().images.generate(
            model=OPENAI_IMAGE_MODEL,
            prompt=_IMAGE_PROMPT.format(prompt=prompt),
            size=_IMAGE_CANVAS,
            quality=_IMAGE_QUALITY[ImageSize(size)],
            n=1,
        )
    except OpenAIError as e:
        logger.error(f"[Image fail] {type(e).__name__}: {e}")
        raise GenerationError(f"Image generation failed: {e}") from e

    for image in response.data or []:
        if getattr(image, "b64_json", None):
            logger.info(f"[Image OK] tier={ImageSize(size).value} (base64)")
            return b64_to_data_url(image.b64_json)
        if getattr(image, "url", None):
            try:
                data_url = download_image_as_data_url(image.url)
            except requests.RequestException as e:
                logger.error(f"[Image fail] download error: {e}")
                raise GenerationError(f"Could not download generated image: {e}") from e
            logger.info(f"[Image OK] tier={ImageSize(size).value} (url)")
            return data_url

    raise GenerationError("No image data found in response")


# ---------------- Text ----------------
def generate_market_analysis(categories: Sequence[Category]) -> str:
    names = ", ".join(Category(c).value for c in categories) or "all sneaker categories"
    text = _chat(_SYS_PROMPT_ANALYST, f"Categories: {names}", max_tokens=_ANALYSIS_MAX_TOKENS)
    if not text:
        raise GenerationError("Generation service returned an empty analysis")
    logger.info(f"[Analysis OK] {len(text)} chars for {names}")
    return text


def _strip_fences(raw: str) -> str:
    s = (raw or "").strip().strip("` \n")
    if s.lower().startswith("json"):
        s = s[4:].lstrip(":").strip()
    return s


def parse_offer_suggestions(raw: str) -> List[OfferSuggestion]:
    """
    Accept either a bare JSON list of suggestions or {"suggestions": [...]}.
    Anything else, or any invalid record, fails the whole batch.
    """
    try:
        data = json.loads(_strip_fences(raw))
    except json.JSONDecodeError as e:
        raise GenerationError("Offer response is not valid JSON") from e

    if isinstance(data, dict):
        data = data.get("suggestions")
    if not isinstance(data, list):
        raise GenerationError("Offer response does not contain a list of suggestions")

    try:
        return _SUGGESTIONS.validate_python(data)
    except PydanticValidationError as e:
        logger.warning(f"[Offers] rejected payload: {e.error_count()} invalid field(s)")
        raise GenerationError("Offer response has an unexpected shape") from e


def generate_campaign_offers(products: Sequence[Product], theme: str) -> List[OfferSuggestion]:
    snapshot = [
        {"id": p.id, "name": p.name, "category": p.category.value, "price": p.price}
        for p in products
    ]
    user = f"Campaign theme: {(theme or '').strip() or 'general sale'}\nCatalog: {json.dumps(snapshot)}"
    raw = _chat(_SYS_PROMPT_OFFERS, user, max_tokens=_OFFERS_MAX_TOKENS, json_mode=True)
    suggestions = parse_offer_suggestions(raw)
    logger.info(f"[Offers OK] {len(suggestions)} suggestion(s) for theme {theme!r}")
    return suggestions
