# Client for Ollama local inference via /api/chat with streaming enabled.
# Ollama answers with one JSON object per line until {"done": true}.

import json
from typing import Iterator, List
import requests
from ...types import Message, ModelParams


class OllamaClient:
    def __init__(self, model: str = "mistral:7b-instruct", host: str = "http://localhost:11434", timeout: float = 180.0):
        self.model = model
        self.host = host.rstrip("/")
        self.timeout = timeout

    def set_model(self, model: str):
        self.model = model

    def stream(self, messages: List[Message], params: ModelParams) -> Iterator[str]:
        payload = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "stream": True,
            "options": {
                "temperature": float(params.temperature if params.temperature is not None else 0.7),
                "num_predict": int(params.max_tokens or 4096),
            },
        }
        url = f"{self.host}/api/chat"
        with requests.post(url, json=payload, stream=True, timeout=self.timeout) as resp:
            resp.raise_for_status()
            for line in resp.iter_lines(decode_unicode=True):
                if not line:
                    continue
                data = json.loads(line)
                if data.get("error"):
                    raise RuntimeError(f"Ollama error: {data['error']}")
                text = (data.get("message") or {}).get("content", "")
                if text:
                    yield text
                if data.get("done"):
                    break
