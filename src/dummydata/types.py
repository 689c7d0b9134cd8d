# Shared data structures for the options model and the generator layer.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidOptionError


class DataFormat(str, Enum):
    """Output format: drives both the model instructions and the export file."""
    JSON = "JSON"
    CSV = "CSV"
    XML = "XML"
    TXT = "TXT"

    @property
    def extension(self) -> str:
        return self.value.lower()

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self]

    @classmethod
    def parse(cls, value: str) -> "DataFormat":
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidOptionError(f"Unsupported format: {value!r}") from None


MIME_TYPES = {
    DataFormat.JSON: "application/json",
    DataFormat.CSV: "text/csv",
    DataFormat.XML: "application/xml",
    DataFormat.TXT: "text/plain",
}


class DateFormat(str, Enum):
    ISO_8601 = "ISO 8601"
    YMD_DASH = "YYYY-MM-DD"
    MDY_SLASH = "MM/DD/YYYY"
    DMY_SLASH = "DD/MM/YYYY"
    UNIX_MS = "Unix Timestamp"

    @property
    def label(self) -> str:
        return DATE_FORMAT_LABELS[self]


DATE_FORMAT_LABELS = {
    DateFormat.ISO_8601: "ISO 8601 (YYYY-MM-DDTHH...)",
    DateFormat.YMD_DASH: "YYYY-MM-DD",
    DateFormat.MDY_SLASH: "MM/DD/YYYY",
    DateFormat.DMY_SLASH: "DD/MM/YYYY",
    DateFormat.UNIX_MS: "Unix Timestamp (ms)",
}

DEFAULT_PRECISION = "default"
DECIMAL_CHOICES: Tuple[str, ...] = (DEFAULT_PRECISION, "0", "1", "2", "3", "4")


@dataclass(frozen=True)
class GenerationOptions:
    """Formatting choices fixed for the duration of one generation."""
    date_format: DateFormat = DateFormat.ISO_8601
    decimal_places: str = DEFAULT_PRECISION

    @property
    def rounds_numbers(self) -> bool:
        return self.decimal_places != DEFAULT_PRECISION

    @classmethod
    def parse(cls, date_format: Optional[str] = None, decimal_places: Optional[str] = None) -> "GenerationOptions":
        """Build options from raw form/CLI values, rejecting anything off the menu."""
        if date_format is None:
            df = DateFormat.ISO_8601
        else:
            try:
                df = DateFormat(date_format)
            except ValueError:
                raise InvalidOptionError(f"Unsupported date format: {date_format!r}") from None

        places = DEFAULT_PRECISION if decimal_places is None else str(decimal_places).strip()
        if places not in DECIMAL_CHOICES:
            raise InvalidOptionError(
                f"Unsupported decimal precision: {decimal_places!r} (expected one of {', '.join(DECIMAL_CHOICES)})"
            )
        return cls(date_format=df, decimal_places=places)


@dataclass(frozen=True)
class ExamplePrompt:
    label: str
    text: str


EXAMPLE_PROMPTS: Tuple[ExamplePrompt, ...] = (
    ExamplePrompt("User Profiles", "10 users with id, name, email, address (city, state), and role (Admin, User)"),
    ExamplePrompt("E-commerce", "5 products with name, price, category, stock count, and isAvailable boolean"),
    ExamplePrompt("Transactions", "List of 5 financial transactions with id, amount, currency, status, and timestamp"),
    ExamplePrompt("Sensor Data", "20 sensor readings with deviceId, temperature, humidity, and timestamp"),
)

DEFAULT_PROMPT = "10 users with a name, email, address, and a unique ID from 1 to 10"


def find_example(label: str) -> Optional[ExamplePrompt]:
    for ex in EXAMPLE_PROMPTS:
        if ex.label.lower() == label.strip().lower():
            return ex
    return None


@dataclass
class Message:
    """Single chat turn: system or user."""
    role: str
    content: str


@dataclass
class ModelParams:
    """LLM parameters per request."""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
