"""
Voxboard Backend - Abstract Text Generation Interface
======================================================

What:  Abstract base class for generative-language providers.
How:   Concrete implementations inherit from TextGenerator and implement
       generate().
Who:   The /generate route, through the `get_text_generator` dependency.

Implementations:
    - GeminiService: Google Gemini via google-generativeai (default)
    - Test fakes installed on app.state by the test suite
"""

from abc import ABC, abstractmethod


class TextGenerator(ABC):
    """
    Contract:
        - generate() accepts a topic and returns the model's text answer
        - Implementations handle their own retry logic and error translation
        - All provider errors are wrapped in GenerationError
    """

    @abstractmethod
    async def generate(self, topic: str) -> str:
        """
        Ask the model for information about `topic`.

        Returns:
            Non-empty generated text.

        Raises:
            GenerationError: provider failed after retries or returned nothing.
        """
        ...
