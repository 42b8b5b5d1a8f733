"""
ChatService backed by Google Gen AI (Vertex AI).

Each prompt envelope is sent as a single user turn; no conversation state is
kept between calls.
"""

from __future__ import annotations

import base64
import binascii
import logging

from google import genai
from google.genai import types
from langfuse import observe

from app.entities.message import ContentPart, PromptEnvelope, ReplyEnvelope
from app.services.ChatService.chat_service_interface import (
    ChatBackendError,
    ChatServiceInterface,
)

DATA_URL_PREFIX = "data:"
BASE64_MARKER = ";base64,"


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """Split ``data:<mime>;base64,<payload>`` into (mime, raw bytes)."""
    if not data_url.startswith(DATA_URL_PREFIX) or BASE64_MARKER not in data_url:
        raise ValueError("Not a base64 data URL")

    header, payload = data_url[len(DATA_URL_PREFIX) :].split(BASE64_MARKER, 1)
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError("Invalid base64 payload") from exc
    return header or "application/octet-stream", data


def encode_data_url(mime_type: str, data: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


class ChatService(ChatServiceInterface):
    def __init__(
        self,
        model_name: str,
        location: str,
        project_id: str | None,
        temperature: float,
        max_tokens: int,
        logger: logging.Logger,
        system_prompt: str | None = None,
    ) -> None:
        """
        Initialize the service with Vertex AI configuration.

        Args:
            model_name: Gemini model used for every request
            location: Vertex AI location (e.g., "us-central1")
            project_id: GCP Project ID (optional)
            temperature: Model temperature
            max_tokens: Max tokens for generation
            logger: Logger instance
            system_prompt: Optional system instructions
        """
        self.model_name = model_name
        self.location = location
        self.project_id = project_id
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger
        self.system_prompt = system_prompt

        self.client = genai.Client(
            vertexai=True, project=self.project_id, location=self.location
        )

        self.logger.info(
            "ChatService initialized. Model: %s, Location: %s",
            self.model_name,
            self.location,
        )

    def _build_parts(self, prompt: PromptEnvelope) -> list[types.Part]:
        parts: list[types.Part] = []
        for item in prompt["content"]:
            if item["type"] == "text":
                parts.append(types.Part.from_text(text=item["text"]))
            elif item["type"] == "image":
                mime_type, data = decode_data_url(item["base64"])
                parts.append(types.Part.from_bytes(data=data, mime_type=mime_type))
        return parts

    def _build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            system_instruction=self.system_prompt or None,
        )

    def _parse_response(
        self, response: types.GenerateContentResponse
    ) -> ReplyEnvelope:
        content: list[ContentPart] = []
        candidates = response.candidates or []
        if not candidates or not candidates[0].content:
            self.logger.warning("Backend returned no candidates")
            return {"content": content}

        for index, part in enumerate(candidates[0].content.parts or []):
            if part.text:
                content.append({"type": "text", "text": part.text})
            elif part.inline_data and part.inline_data.data:
                mime_type = part.inline_data.mime_type or "application/octet-stream"
                content.append(
                    {
                        "type": "image",
                        "name": f"reply-{index}",
                        "base64": encode_data_url(mime_type, part.inline_data.data),
                    }
                )

        return {"content": content}

    @observe()
    async def send_message(
        self, prompt: PromptEnvelope, user_id: str
    ) -> ReplyEnvelope:
        try:
            parts = self._build_parts(prompt)
        except ValueError as exc:
            raise ChatBackendError(f"Malformed prompt content: {exc}") from exc

        self.logger.info("Sending prompt with %s parts for user %s", len(parts), user_id)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=[types.Content(role="user", parts=parts)],
                config=self._build_config(),
            )
        except Exception as exc:
            raise ChatBackendError(f"Backend request failed: {exc}") from exc

        return self._parse_response(response)
