# DataGenerator: compiles the form options into a prompt, opens one streaming
# call on the model client and hands every fragment to the caller in order.

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

import yaml

from ..errors import GenerationError
from ..prompts import compile_prompt
from ..types import DataFormat, GenerationOptions, ModelParams

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")


class DataGenerator:
    def __init__(self, model_client, config_path: Optional[Union[str, Path]] = None):
        self.model_client = model_client
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.cfg = self._load_config()

    def _load_config(self) -> dict:
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _params(self) -> ModelParams:
        return ModelParams(
            temperature=self.cfg.get("temperature"),
            max_tokens=self.cfg.get("max_tokens"),
        )

    def iter_chunks(self, prompt: str, fmt: DataFormat, options: GenerationOptions) -> Iterator[str]:
        """Yield text fragments from the model as they arrive.

        No retries. Any transport error surfaces as GenerationError; fragments
        already yielded stay yielded.
        """
        messages = compile_prompt(prompt, fmt, options)
        engine = type(self.model_client).__name__
        logger.info("generation started engine=%s model=%s format=%s",
                    engine, getattr(self.model_client, "model", None), getattr(fmt, "value", fmt))
        count = 0
        try:
            for fragment in self.model_client.stream(messages, self._params()):
                if not fragment:
                    continue
                count += 1
                yield fragment
        except GenerationError:
            raise
        except Exception as e:
            logger.exception("generation failed after %d chunk(s) engine=%s", count, engine)
            raise GenerationError(str(e) or type(e).__name__) from e
        logger.info("generation finished chunks=%d", count)

    def generate(
        self,
        prompt: str,
        fmt: DataFormat,
        options: GenerationOptions,
        on_chunk: Callable[[str], None],
    ) -> None:
        """Stream a whole generation, calling on_chunk(fragment) for each piece in arrival order."""
        for fragment in self.iter_chunks(prompt, fmt, options):
            on_chunk(fragment)
