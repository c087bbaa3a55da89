"""GeminiService 단위 테스트 (Qt/네트워크 의존 없음)."""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest

from src.services.gemini_service import GeminiService
from src.utils.errors import GatewayError


def _text_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _http_response(payload: dict) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = json.dumps(payload).encode()
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


class TestBuildBodies:
    def test_captions_body_has_image_and_schema(self):
        body = GeminiService._build_captions_body(b"\x89PNG", "image/png")
        parts = body["contents"][0]["parts"]
        assert parts[0]["inline_data"]["mime_type"] == "image/png"
        assert base64.b64decode(parts[0]["inline_data"]["data"]) == b"\x89PNG"
        assert parts[1]["text"] == GeminiService.CAPTION_PROMPT
        assert body["generationConfig"]["responseSchema"]["type"] == "ARRAY"

    def test_analysis_body_requires_fields(self):
        body = GeminiService._build_analysis_body(b"x", "image/jpeg")
        schema = body["generationConfig"]["responseSchema"]
        assert schema["required"] == ["description", "mood", "keywords"]

    def test_edit_body_carries_instruction(self):
        body = GeminiService._build_edit_body(b"x", "add a party hat")
        assert body["contents"][0]["parts"][1]["text"] == "add a party hat"
        assert body["generationConfig"]["responseModalities"] == ["IMAGE"]


class TestParseCaptions:
    def test_list_of_strings(self):
        data = _text_response('["one", "two", "three"]')
        assert GeminiService._parse_captions(data) == ["one", "two", "three"]

    def test_empty_text_is_empty_list(self):
        assert GeminiService._parse_captions(_text_response("")) == []
        assert GeminiService._parse_captions({}) == []

    def test_empty_array(self):
        assert GeminiService._parse_captions(_text_response("[]")) == []

    def test_malformed_json(self):
        with pytest.raises(GatewayError, match="Malformed"):
            GeminiService._parse_captions(_text_response("[not json"))

    def test_non_string_items(self):
        with pytest.raises(GatewayError):
            GeminiService._parse_captions(_text_response('["ok", 3]'))


class TestParseAnalysis:
    def test_valid(self):
        payload = {"description": "a dog", "mood": "happy", "keywords": ["dog", "grass"]}
        result = GeminiService._parse_analysis(_text_response(json.dumps(payload)))
        assert result.description == "a dog"
        assert result.keywords == ["dog", "grass"]

    def test_missing_field(self):
        payload = {"description": "a dog", "keywords": []}
        with pytest.raises(GatewayError, match="missing"):
            GeminiService._parse_analysis(_text_response(json.dumps(payload)))

    def test_no_text(self):
        with pytest.raises(GatewayError, match="No analysis returned"):
            GeminiService._parse_analysis(_text_response(""))


class TestParseEditedImage:
    def test_inline_data_camel_case(self):
        encoded = base64.b64encode(b"PNGDATA").decode()
        data = {"candidates": [{"content": {"parts": [
            {"text": "here you go"},
            {"inlineData": {"mimeType": "image/png", "data": encoded}},
        ]}}]}
        assert GeminiService._parse_edited_image(data) == (b"PNGDATA", "image/png")

    def test_inline_data_snake_case(self):
        encoded = base64.b64encode(b"JPG").decode()
        data = {"candidates": [{"content": {"parts": [
            {"inline_data": {"mime_type": "image/jpeg", "data": encoded}},
        ]}}]}
        assert GeminiService._parse_edited_image(data) == (b"JPG", "image/jpeg")

    def test_no_image_part(self):
        with pytest.raises(GatewayError, match="No image generated"):
            GeminiService._parse_edited_image(_text_response("I cannot do that"))

    def test_no_candidates(self):
        with pytest.raises(GatewayError, match="No image generated"):
            GeminiService._parse_edited_image({"candidates": []})


class TestCalls:
    def test_api_key_missing_raises(self):
        with pytest.raises(GatewayError, match="Gemini API key"):
            GeminiService("").generate_captions(b"x")

    def test_generate_captions_posts_to_text_model(self):
        service = GeminiService("secret", timeout=7)
        with patch("src.services.gemini_service.urllib.request.urlopen",
                   return_value=_http_response(_text_response('["lol"]'))) as mock_open:
            assert service.generate_captions(b"img") == ["lol"]
        req = mock_open.call_args[0][0]
        assert req.full_url.endswith("/gemini-3-pro-preview:generateContent")
        assert req.get_header("X-goog-api-key") == "secret"
        assert mock_open.call_args[1]["timeout"] == 7

    def test_edit_image_posts_to_image_model(self):
        encoded = base64.b64encode(b"NEW").decode()
        payload = {"candidates": [{"content": {"parts": [
            {"inlineData": {"mimeType": "image/png", "data": encoded}},
        ]}}]}
        service = GeminiService("secret")
        with patch("src.services.gemini_service.urllib.request.urlopen",
                   return_value=_http_response(payload)) as mock_open:
            assert service.edit_image(b"img", "make it snow") == (b"NEW", "image/png")
        assert mock_open.call_args[0][0].full_url.endswith("/gemini-2.5-flash-image:generateContent")

    def test_network_error_wrapped(self):
        import urllib.error
        service = GeminiService("secret")
        with patch("src.services.gemini_service.urllib.request.urlopen",
                   side_effect=urllib.error.URLError("offline")):
            with pytest.raises(GatewayError, match="request failed"):
                service.analyze_image(b"img")
