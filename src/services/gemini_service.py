"""Gemini 기반 캡션 추천 / 이미지 분석 / 이미지 편집 서비스."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import urllib.error
import urllib.request

from src.models.analysis import AnalysisResult
from src.utils.config import (
    GEMINI_API_BASE,
    GEMINI_DEFAULT_TIMEOUT,
    GEMINI_IMAGE_MODEL,
    GEMINI_TEXT_MODEL,
)
from src.utils.errors import GatewayError

logger = logging.getLogger(__name__)


class GeminiService:
    """Gemini ``generateContent`` REST API를 사용하는 AI 게이트웨이."""

    CAPTION_PROMPT = (
        "Analyze this image and generate 5 funny, viral-style, short meme captions "
        "suitable for overlaying on this image. Return ONLY the captions."
    )
    ANALYSIS_PROMPT = (
        "Perform a detailed analysis of this image. Describe the visual content, "
        "the mood/tone, and extract 5 key visual keywords."
    )

    def __init__(
        self,
        api_key: str,
        timeout: float = GEMINI_DEFAULT_TIMEOUT,
        text_model: str = GEMINI_TEXT_MODEL,
        image_model: str = GEMINI_IMAGE_MODEL,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._text_model = text_model
        self._image_model = image_model

    # ------------------------------------------------------------ 요청 본문

    @staticmethod
    def _image_part(image_bytes: bytes, mime_type: str) -> dict:
        return {
            "inline_data": {
                "mime_type": mime_type,
                "data": base64.b64encode(image_bytes).decode("ascii"),
            }
        }

    @staticmethod
    def _build_captions_body(image_bytes: bytes, mime_type: str = "image/png") -> dict:
        return {
            "contents": [{
                "parts": [
                    GeminiService._image_part(image_bytes, mime_type),
                    {"text": GeminiService.CAPTION_PROMPT},
                ],
            }],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": {"type": "ARRAY", "items": {"type": "STRING"}},
            },
        }

    @staticmethod
    def _build_analysis_body(image_bytes: bytes, mime_type: str = "image/png") -> dict:
        return {
            "contents": [{
                "parts": [
                    GeminiService._image_part(image_bytes, mime_type),
                    {"text": GeminiService.ANALYSIS_PROMPT},
                ],
            }],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": {
                    "type": "OBJECT",
                    "properties": {
                        "description": {"type": "STRING"},
                        "mood": {"type": "STRING"},
                        "keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
                    },
                    "required": ["description", "mood", "keywords"],
                },
            },
        }

    @staticmethod
    def _build_edit_body(image_bytes: bytes, instruction: str, mime_type: str = "image/png") -> dict:
        return {
            "contents": [{
                "parts": [
                    GeminiService._image_part(image_bytes, mime_type),
                    {"text": instruction},
                ],
            }],
            "generationConfig": {"responseModalities": ["IMAGE"]},
        }

    # ------------------------------------------------------------ 응답 파싱

    @staticmethod
    def _response_parts(data: dict) -> list[dict]:
        candidates = data.get("candidates") or []
        if not candidates:
            return []
        content = candidates[0].get("content") or {}
        return content.get("parts") or []

    @staticmethod
    def _response_text(data: dict) -> str:
        return "".join(p.get("text", "") for p in GeminiService._response_parts(data))

    @staticmethod
    def _parse_captions(data: dict) -> list[str]:
        """API 응답 dict → 캡션 문자열 리스트 (빈 리스트 허용)."""
        text = GeminiService._response_text(data).strip()
        if not text:
            return []
        try:
            captions = json.loads(text)
        except json.JSONDecodeError as e:
            raise GatewayError(f"Malformed caption response: {e}") from e
        if not isinstance(captions, list) or not all(isinstance(c, str) for c in captions):
            raise GatewayError("Caption response is not a list of strings")
        return captions

    @staticmethod
    def _parse_analysis(data: dict) -> AnalysisResult:
        text = GeminiService._response_text(data).strip()
        if not text:
            raise GatewayError("No analysis returned")
        try:
            return AnalysisResult.from_dict(json.loads(text))
        except json.JSONDecodeError as e:
            raise GatewayError(f"Malformed analysis response: {e}") from e
        except KeyError as e:
            raise GatewayError(f"Analysis response missing field {e}") from e
        except (TypeError, AttributeError) as e:
            raise GatewayError(f"Analysis response has wrong shape: {e}") from e

    @staticmethod
    def _parse_edited_image(data: dict) -> tuple[bytes, str]:
        """첫 번째 inline 이미지 파트 → (bytes, mime_type). 없으면 실패."""
        for part in GeminiService._response_parts(data):
            inline = part.get("inlineData") or part.get("inline_data")
            if inline and inline.get("data"):
                mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                try:
                    return base64.b64decode(inline["data"], validate=True), mime_type
                except (binascii.Error, ValueError) as e:
                    raise GatewayError(f"Edited image payload is not valid base64: {e}") from e
        raise GatewayError("No image generated")

    # ------------------------------------------------------------ 호출

    def _post(self, model: str, body: dict) -> dict:
        if not self._api_key:
            raise GatewayError("Gemini API key is required. Set it via File > Set Gemini API Key or GEMINI_API_KEY.")
        req = urllib.request.Request(
            f"{GEMINI_API_BASE}/{model}:generateContent",
            json.dumps(body).encode(),
            method="POST",
        )
        req.add_header("Content-Type", "application/json")
        req.add_header("x-goog-api-key", self._api_key)
        logger.info(f"Gemini request: model={model}")
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return json.loads(resp.read().decode())
        except urllib.error.HTTPError as e:
            detail = e.read().decode(errors="replace")[:300]
            raise GatewayError(f"Gemini HTTP {e.code}: {detail}") from e
        except (urllib.error.URLError, OSError) as e:
            raise GatewayError(f"Gemini request failed: {e}") from e
        except json.JSONDecodeError as e:
            raise GatewayError(f"Gemini returned invalid JSON: {e}") from e

    def generate_captions(self, image_bytes: bytes, mime_type: str = "image/png") -> list[str]:
        """이미지 → 짧은 밈 캡션 목록.

        Raises:
            GatewayError: 호출 실패 또는 응답 형식 오류.
        """
        data = self._post(self._text_model, self._build_captions_body(image_bytes, mime_type))
        return self._parse_captions(data)

    def analyze_image(self, image_bytes: bytes, mime_type: str = "image/png") -> AnalysisResult:
        """이미지 → 설명/분위기/키워드.

        Raises:
            GatewayError: 호출 실패 또는 필수 필드 누락.
        """
        data = self._post(self._text_model, self._build_analysis_body(image_bytes, mime_type))
        return self._parse_analysis(data)

    def edit_image(self, image_bytes: bytes, instruction: str, mime_type: str = "image/png") -> tuple[bytes, str]:
        """이미지 + 편집 지시 → 새 이미지 (bytes, mime_type).

        Raises:
            GatewayError: 호출 실패 또는 응답에 이미지가 없을 때.
        """
        data = self._post(self._image_model, self._build_edit_body(image_bytes, instruction, mime_type))
        return self._parse_edited_image(data)
