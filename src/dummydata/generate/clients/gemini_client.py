# Client for Google Gemini (google-generativeai), streamed.
# The system message becomes the model's system_instruction; the user turns are the contents.

from typing import Iterator, List, Optional
import google.generativeai as genai
from ...types import Message, ModelParams


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.5-flash"):
        self.model = model
        genai.configure(api_key=api_key)

    def set_model(self, model: str):
        self.model = model

    def stream(self, messages: List[Message], params: ModelParams) -> Iterator[str]:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = "\n\n".join(m.content for m in messages if m.role != "system")

        model = genai.GenerativeModel(self.model, system_instruction=system or None)
        config = {}
        if params.temperature is not None:
            config["temperature"] = params.temperature
        if params.max_tokens:
            config["max_output_tokens"] = params.max_tokens

        response = model.generate_content(contents, generation_config=config or None, stream=True)
        for chunk in response:
            # chunks blocked by safety filters carry no parts; .text would raise on them
            if chunk.parts:
                yield chunk.text
