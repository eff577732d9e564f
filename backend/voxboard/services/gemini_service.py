"""
Voxboard Backend - Google Gemini Service Implementation
========================================================

What:  Concrete TextGenerator using Google Gemini (google-generativeai).
How:   Builds a fixed prompt around the requested topic, sends it with
       `generate_content_async`, and retries transient failures with tenacity.
Who:   Built once in create_app(); called by POST /generate.

Resilience:
    Tenacity retry with exponential backoff + jitter (RETRY_* settings).
    Exhausted retries, blocked responses, and empty output all surface as
    GenerationError (HTTP 500).
"""

import logging
import time
import uuid

import google.generativeai as genai
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential_jitter,
)

from voxboard.config import Settings
from voxboard.exceptions import GenerationError
from voxboard.services.llm_base import TextGenerator

logger = logging.getLogger(__name__)


class GeminiService(TextGenerator):
    """
    Google Gemini implementation of TextGenerator.

    Error Handling Chain:
        API call fails -> tenacity retries (RETRY_MAX_ATTEMPTS with backoff)
        -> all retries fail -> GenerationError
    """

    PROMPT_TEMPLATE = 'I need information based on the topic "{topic}".'

    def __init__(self, settings: Settings):
        if settings.gemini_api_key and settings.gemini_api_key != "your_gemini_api_key_here":
            genai.configure(api_key=settings.gemini_api_key)

        self.model_name = settings.gemini_model
        self.model = genai.GenerativeModel(settings.gemini_model)
        self.max_attempts = settings.retry_max_attempts
        self.retrying = AsyncRetrying(
            stop=stop_after_attempt(settings.retry_max_attempts),
            wait=wait_exponential_jitter(
                initial=settings.retry_min_wait,
                max=settings.retry_max_wait,
                jitter=1,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        logger.info("GeminiService initialized with model=%s", settings.gemini_model)

    def build_prompt(self, topic: str) -> str:
        return self.PROMPT_TEMPLATE.format(topic=topic)

    async def generate(self, topic: str) -> str:
        """
        Flow:
            1. Build the prompt from the topic
            2. Call Gemini with retry logic
            3. Reject empty output
        """
        request_id = str(uuid.uuid4())[:8]
        logger.info("[%s] Starting Gemini generation (%d char topic)", request_id, len(topic))

        try:
            # copy(): each call gets its own retry statistics
            result = await self.retrying.copy()(
                self._call_gemini, self.build_prompt(topic), request_id
            )
        except Exception as e:
            # reraise=True: this is the last attempt's own exception
            logger.error(
                "[%s] Gemini generation failed after %d attempts: %s",
                request_id,
                self.max_attempts,
                str(e),
                exc_info=True,
            )
            raise GenerationError(
                context={
                    "request_id": request_id,
                    "attempts": self.max_attempts,
                    "error_type": type(e).__name__,
                },
            ) from e

        if not result:
            raise GenerationError(
                message="The model returned no content",
                context={"request_id": request_id},
            )
        return result

    async def _call_gemini(self, prompt: str, request_id: str) -> str:
        """
        One Gemini API call; self.retrying repeats it on failure.

        Latency and response size are logged for every attempt.
        """
        start_time = time.time()

        try:
            response = await self.model.generate_content_async(
                prompt,
                request_options={"timeout": 60},
            )
            text = response.text.strip() if response.text else ""
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Gemini API call failed after %.0fms: %s",
                request_id,
                duration_ms,
                str(e),
            )
            raise

        logger.info(
            "[%s] Gemini generation completed in %.0fms, produced %d chars",
            request_id,
            (time.time() - start_time) * 1000,
            len(text),
        )
        return text
