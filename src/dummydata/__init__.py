# Dummy Data Studio: natural-language descriptions in, streamed JSON/CSV/XML/TXT out.

from .types import DataFormat, DateFormat, GenerationOptions
from .prompts import compile_prompt
from .generate import DataGenerator
from .session import GenerationSession
from .export import build_download, copy_to_clipboard

__all__ = [
    "DataFormat",
    "DateFormat",
    "GenerationOptions",
    "compile_prompt",
    "DataGenerator",
    "GenerationSession",
    "build_download",
    "copy_to_clipboard",
]

__version__ = "1.0.0"
