"""
LLM Service
Chat-completion client for the report pipeline
"""

import time

from loguru import logger
from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from cost_report.core.config import settings
from cost_report.core.exceptions import LLMServiceError, MissingConfigError
from cost_report.core.logging import log_external_call

GENERIC_FAILURE_MESSAGE = "Error generating report. Please check API key or try again."


def _upstream_message(exc: APIError) -> str:
    """Best human-readable message the upstream gave us"""
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return exc.message or GENERIC_FAILURE_MESSAGE


class LLMService:
    """OpenAI-compatible chat completion against the configured upstream"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
    ):
        self.provider = settings.LLM_PROVIDER
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.base_url = base_url or settings.LLM_BASE_URL
        self.model = model or settings.LLM_MODEL

        if self.api_key:
            self.client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        else:
            self.client = None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Run one system+user exchange and return the raw text"""
        if not self.client:
            logger.error("LLM_API_KEY is not configured")
            raise MissingConfigError("LLM_API_KEY")

        start = time.perf_counter()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=settings.LLM_TEMPERATURE if temperature is None else temperature,
                max_tokens=max_tokens or settings.LLM_MAX_TOKENS,
            )
        except APIStatusError as e:
            message = _upstream_message(e)
            log_external_call(
                "llm", self.provider, (time.perf_counter() - start) * 1000, False, message
            )
            raise LLMServiceError(message, provider=self.provider, status_code=e.status_code) from e
        except APIConnectionError as e:
            log_external_call(
                "llm", self.provider, (time.perf_counter() - start) * 1000, False, str(e)
            )
            raise LLMServiceError(
                e.message or GENERIC_FAILURE_MESSAGE, provider=self.provider
            ) from e
        except APIError as e:
            message = _upstream_message(e)
            log_external_call(
                "llm", self.provider, (time.perf_counter() - start) * 1000, False, message
            )
            raise LLMServiceError(message, provider=self.provider) from e

        log_external_call("llm", self.provider, (time.perf_counter() - start) * 1000, True)

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


async def get_llm_service() -> LLMService:
    """Get LLM service instance"""
    return LLMService()
