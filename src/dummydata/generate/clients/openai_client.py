# Client for the OpenAI Chat Completions API, streamed.

from typing import Iterator, List, Optional
from openai import OpenAI
from ...types import Message, ModelParams


class OpenAIClient:
    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-4o-mini"):
        self.model = model
        self.client = OpenAI(api_key=api_key)

    def set_model(self, model: str):
        self.model = model

    def stream(self, messages: List[Message], params: ModelParams) -> Iterator[str]:
        formatted = [{"role": m.role, "content": m.content} for m in messages]
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=formatted,
            temperature=params.temperature if params.temperature is not None else 0.7,
            max_tokens=params.max_tokens or 4096,
            stream=True,
        )
        for chunk in resp:
            if not chunk.choices:
                continue
            text = chunk.choices[0].delta.content
            if text:
                yield text
