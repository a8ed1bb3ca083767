"""Google Gemini provider, generous free tier."""

from __future__ import annotations

from condenser.providers.base import ChatRequest, ChatResponse, LLMProvider, Usage


class GeminiProvider(LLMProvider):
    name = "gemini"
    default_model = "gemini-2.0-flash"
    default_max_tokens = 8192

    def __init__(self, model: str | None = None) -> None:
        from google import genai

        super().__init__(model)
        self._client = genai.Client()

    async def chat(self, request: ChatRequest) -> ChatResponse:
        from google.genai import types

        # Gemini calls the assistant role "model"
        contents = [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part(text=m.content)],
            )
            for m in request.conversation
        ]

        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=request.system or None,
                max_output_tokens=self.max_tokens_for(request),
                temperature=request.temperature,
            ),
        )

        usage = None
        meta = response.usage_metadata
        if meta is not None:
            usage = Usage(
                prompt_tokens=meta.prompt_token_count or 0,
                completion_tokens=meta.candidates_token_count or 0,
                total_tokens=meta.total_token_count or 0,
            )
        return ChatResponse(content=response.text or "", usage=usage)
