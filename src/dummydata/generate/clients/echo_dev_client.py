# Offline model client for local dev and tests: no API calls, deterministic output.

from typing import Iterator, List
from ...types import Message, ModelParams

_SAMPLES = {
    "JSON": ['[\n  {"id": 1, ', '"name": "Echo User", ', '"active": true}\n]'],
    "CSV": ["id,name,active\n", "1,Echo User,true\n"],
    "XML": ["<data>\n", "  <item><id>1</id><name>Echo User</name></item>\n", "</data>"],
    "TXT": ["[ECHO RESPONSE]\n", "1. Echo User\n"],
}


class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"

    def set_model(self, model: str):
        self.model = model

    def stream(self, messages: List[Message], params: ModelParams) -> Iterator[str]:
        user_inputs = [m.content for m in messages if m.role == "user"]
        request = user_inputs[-1] if user_inputs else ""
        fmt = "TXT"
        for name in _SAMPLES:
            if f"in {name} format" in request:
                fmt = name
                break
        yield from _SAMPLES[fmt]
