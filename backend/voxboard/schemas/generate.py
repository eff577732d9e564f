"""Voxboard Backend - Text Generation Schemas"""

from typing import Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    topic: Optional[str] = Field(default=None, description="Subject to ask the model about")


class GenerateResponse(BaseModel):
    response: str = Field(description="Generated text")
