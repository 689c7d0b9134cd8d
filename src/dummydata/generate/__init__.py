# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import DataGenerator
from .clients import EchoDevClient, build_model_client

__all__ = ["DataGenerator", "EchoDevClient", "build_model_client"]
