"""
Voxboard Backend - Speech Synthesis Adapter
============================================

What:  Converts text into an MP3 byte buffer with Google Cloud Text-to-Speech.
How:   One `synthesize_speech` call per request with a fixed voice
       configuration (language, SSML gender, MP3 encoding) from settings.
Who:   SoundboardService, first step of soundboard creation.

Contract:
    - Returns non-empty MP3 bytes
    - Raises SynthesisError when the call fails or the response has no audio
    - No retry, no chunking, no streaming; the caller surfaces failures as
      an internal error
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from google.cloud import texttospeech

from voxboard.config import Settings
from voxboard.exceptions import SynthesisError

logger = logging.getLogger(__name__)


class SpeechSynthesizer(ABC):
    """Abstract text-to-speech interface; tests install an in-memory fake."""

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize `text` into MP3 audio.

        Raises:
            SynthesisError: the provider call failed or returned no audio.
        """
        ...


class GoogleSpeechSynthesizer(SpeechSynthesizer):
    """
    Text-to-Speech implementation backed by `TextToSpeechAsyncClient`.

    The client is created on first use inside the running event loop, so
    building the application never needs credentials.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[texttospeech.TextToSpeechAsyncClient] = None,
    ):
        self.language_code = settings.tts_language_code
        self.ssml_gender = settings.tts_ssml_gender
        self.credentials_file = settings.gcp_credentials_file
        self._client = client

    @property
    def client(self) -> texttospeech.TextToSpeechAsyncClient:
        if self._client is None:
            if self.credentials_file:
                self._client = texttospeech.TextToSpeechAsyncClient.from_service_account_file(
                    self.credentials_file
                )
            else:
                self._client = texttospeech.TextToSpeechAsyncClient()
            logger.info(
                "Text-to-Speech client initialized (language=%s, gender=%s)",
                self.language_code,
                self.ssml_gender,
            )
        return self._client

    async def synthesize(self, text: str) -> bytes:
        start_time = time.perf_counter()

        try:
            response = await self.client.synthesize_speech(
                input=texttospeech.SynthesisInput(text=text),
                voice=texttospeech.VoiceSelectionParams(
                    language_code=self.language_code,
                    ssml_gender=texttospeech.SsmlVoiceGender[self.ssml_gender],
                ),
                audio_config=texttospeech.AudioConfig(
                    audio_encoding=texttospeech.AudioEncoding.MP3,
                ),
            )
        except Exception as e:
            logger.error("Speech synthesis failed: %s", str(e))
            raise SynthesisError(
                message=f"Error generating speech: {e}",
                context={"error_type": type(e).__name__, "text_length": len(text)},
            ) from e

        audio = response.audio_content
        if not audio:
            logger.error("Speech synthesis returned no audio for %d chars", len(text))
            raise SynthesisError(
                message="Speech synthesis returned no audio content",
                context={"text_length": len(text)},
            )

        logger.info(
            "Synthesized %d chars into %d bytes in %.0fms",
            len(text),
            len(audio),
            (time.perf_counter() - start_time) * 1000,
        )
        return audio
