"""
Tests for the Gemini generation client.
"""
import base64
from unittest.mock import AsyncMock, patch

import pytest
from google.genai import types

from gemini_fakes import image_part, make_image_response
from utils.gemini_client import (
    MODEL_NAME,
    MissingApiKeyError,
    NoImageReturnedError,
    build_prompt,
    extract_image,
    generate_photo,
    strip_data_url,
)


@pytest.fixture
def mock_genai():
    with patch("utils.gemini_client.genai") as mock:
        yield mock


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test_key")


def test_build_prompt_embeds_location_and_costume():
    prompt = build_prompt("Sa Pa", "Trang phục Tày")

    assert "Destination: Sa Pa." in prompt
    assert "Traditional Trang phục Tày ethnic clothing of Vietnam" in prompt
    assert "ambient lighting of Sa Pa" in prompt


def test_strip_data_url_keeps_payload_only():
    assert strip_data_url("data:image/jpeg;base64,QUJD") == "QUJD"


def test_extract_image_skips_text_parts(result_png):
    response = make_image_response(types.Part(text="Here you go"), image_part(result_png))

    data_url = extract_image(response)

    assert data_url.startswith("data:image/png;base64,")
    assert base64.b64decode(data_url.split(",", 1)[1]) == result_png


def test_extract_image_returns_first_image(result_png, png_bytes):
    response = make_image_response(image_part(result_png), image_part(png_bytes))

    assert base64.b64decode(extract_image(response).split(",", 1)[1]) == result_png


def test_extract_image_accepts_empty_inline_data():
    response = make_image_response(
        types.Part(text="hi"),
        types.Part(inline_data=types.Blob(data=b"", mime_type="image/png")),
    )

    assert extract_image(response) == "data:image/png;base64,"


def test_extract_image_without_image_part():
    with pytest.raises(NoImageReturnedError):
        extract_image(make_image_response(types.Part(text="sorry")))


def test_extract_image_without_candidates():
    with pytest.raises(NoImageReturnedError):
        extract_image(types.GenerateContentResponse(candidates=[]))


class TestGeneratePhoto:

    @pytest.mark.asyncio
    async def test_sends_primary_image_and_prompt(self, mock_genai, api_key, png_data_url, png_bytes, result_png):
        generate = AsyncMock(return_value=make_image_response(image_part(result_png)))
        mock_genai.Client.return_value.aio.models.generate_content = generate

        second = "data:image/png;base64," + base64.b64encode(b"ignored").decode()
        result = await generate_photo([png_data_url, second], "Sa Pa", "Trang phục Tày")

        assert result == f"data:image/png;base64,{base64.b64encode(result_png).decode()}"
        mock_genai.Client.assert_called_once_with(api_key="test_key")
        generate.assert_awaited_once()

        kwargs = generate.call_args.kwargs
        assert kwargs["model"] == MODEL_NAME
        image, text = kwargs["contents"].parts
        assert image.inline_data.data == png_bytes
        assert image.inline_data.mime_type == "image/png"
        assert text.text == build_prompt("Sa Pa", "Trang phục Tày")

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_at_call_time(self, mock_genai, monkeypatch, png_data_url):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with pytest.raises(MissingApiKeyError):
            await generate_photo([png_data_url], "Sa Pa", "Trang phục Tày")

        mock_genai.Client.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_image_in_response(self, mock_genai, api_key, png_data_url):
        mock_genai.Client.return_value.aio.models.generate_content = AsyncMock(
            return_value=make_image_response(types.Part(text="no image today"))
        )

        with pytest.raises(NoImageReturnedError):
            await generate_photo([png_data_url], "Sa Pa", "Trang phục Tày")

    @pytest.mark.asyncio
    async def test_api_errors_propagate_without_retry(self, mock_genai, api_key, png_data_url):
        generate = AsyncMock(side_effect=ConnectionError("network down"))
        mock_genai.Client.return_value.aio.models.generate_content = generate

        with pytest.raises(ConnectionError):
            await generate_photo([png_data_url], "Sa Pa", "Trang phục Tày")

        assert generate.await_count == 1
