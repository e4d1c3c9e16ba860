# utils/gemini_client.py
from google import genai
from google.genai import types
from typing import List
import base64
import logging
import os

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_API_KEY"
MODEL_NAME = "gemini-2.5-flash-image"


class GenerationError(RuntimeError):
    pass


class MissingApiKeyError(GenerationError):
    pass


class NoImageReturnedError(GenerationError):
    pass


# =========================
# PROMPT
# =========================
PHOTO_PROMPT = """
Task: Professional Photo Merging and Style Transfer.
Subject: The person/people in the provided image.
Destination: {location}.
Attire: Traditional {costume} ethnic clothing of Vietnam.
Instructions:
1. Realistic composite: Seamlessly place the person from the image into a high-quality, cinematic photo of {location}.
2. Ethnic Makeover: Dress them in highly detailed, authentic {costume} traditional attire.
3. Lighting: Ensure the lighting on the subject matches the ambient lighting of {location}.
4. Quality: 4k resolution, professional photography style, vibrant colors, sharp focus on the subject.
5. Authenticity: The background {location} should be recognizable and beautiful.
"""


def build_prompt(location: str, costume: str) -> str:
    return PHOTO_PROMPT.format(location=location, costume=costume)


def get_client() -> genai.Client:
    # Read on every call: a missing key must fail the request, not the import
    api_key = os.getenv(API_KEY_ENV)
    if not api_key:
        raise MissingApiKeyError(f"Missing {API_KEY_ENV} environment variable")
    return genai.Client(api_key=api_key)


def strip_data_url(data_url: str) -> str:
    """Return the base64 payload of a data URL (everything after the first comma)."""
    return data_url.split(",", 1)[1]


def extract_image(response) -> str:
    """First inline image of the first candidate, re-wrapped as a PNG data URL."""
    candidates = getattr(response, "candidates", None) or []
    parts = []
    if candidates and candidates[0].content is not None:
        parts = candidates[0].content.parts or []

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None:
            data = inline.data or b""
            return f"data:image/png;base64,{base64.b64encode(data).decode()}"

    raise NoImageReturnedError("No image data received from API")


# =========================
# GENERATION
# =========================
async def generate_photo(images: List[str], location: str, costume: str) -> str:
    """
    Composite the person in the primary image into `location` wearing `costume`.
    Only images[0] is sent; the rest are accepted but unused.
    """
    try:
        client = get_client()
        primary_image = base64.b64decode(strip_data_url(images[0]))
        prompt = build_prompt(location, costume)

        response = await client.aio.models.generate_content(
            model=MODEL_NAME,
            contents=types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=primary_image, mime_type="image/png"),
                    types.Part(text=prompt),
                ],
            ),
        )
        return extract_image(response)

    except Exception as e:
        logger.error(f"Gemini API Error: {e!r}")
        raise
