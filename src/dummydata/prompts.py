# Prompt fragments and the compiler that turns form options into model instructions.
# Pure functions only: same inputs, same strings, never raises.

from __future__ import annotations
from typing import List, Union

from .types import DataFormat, DateFormat, GenerationOptions, Message

CORE_RULES = """\
You are a sophisticated dummy data generator engine.
Your task is to generate realistic, diverse, and structurally correct data based on the user's description.

CORE RULES:
1. Output ONLY the raw data. Do NOT include markdown code blocks (like ```json), explanatory text, or conversational filler.
2. Complex Structures: You are capable of generating deeply nested JSON, relational data, and complex object schemas.
3. Data Types: Respect requested types (Enums, Booleans, Floats, Dates).
   - If a user asks for "status (Active, Inactive)", randomly assign these values.
   - If a user asks for "boolean", output raw true/false.
4. Quantity: Adhere strictly to the requested number of items.
"""

FORMAT_INSTRUCTIONS = {
    DataFormat.JSON: """\
- Generate valid JSON syntax.
- Support nested objects and arrays deeply if requested.
- Use specific data types (boolean, numbers, null) correctly, do not wrap everything in strings unless necessary.
""",
    DataFormat.CSV: """\
- Generate valid CSV with a header row.
- If nested data is requested, flatten it using dot notation for headers (e.g., 'address.city') or understandable conventions.
- Enclose strings containing commas in quotes.
""",
    DataFormat.XML: """\
- Generate valid XML with a single root element (e.g., <root> or <data> if not specified).
- Use semantic tags based on property names.
- Handle nested structures as nested elements.
""",
    DataFormat.TXT: """\
- Format as plain text or structured text as requested (e.g., lists, paragraphs).
""",
}

DATE_HINTS = {
    DateFormat.UNIX_MS: 'Since "Unix Timestamp" is requested, return an integer (milliseconds since epoch).',
    DateFormat.ISO_8601: 'Since "ISO 8601" is requested, use YYYY-MM-DDTHH:mm:ss.sssZ.',
}

STANDARD_PRECISION = "Use standard precision for numbers."


def _coerce_format(fmt: Union[DataFormat, str, None]) -> DataFormat | None:
    if isinstance(fmt, DataFormat):
        return fmt
    try:
        return DataFormat(str(fmt).strip().upper())
    except ValueError:
        return None


def format_instructions(fmt: Union[DataFormat, str, None]) -> str:
    """Guidance for one format; anything unrecognised gets the plain-text set."""
    known = _coerce_format(fmt)
    return FORMAT_INSTRUCTIONS[known or DataFormat.TXT]


def precision_rule(decimal_places: str) -> str:
    if decimal_places == "default":
        return STANDARD_PRECISION
    return f"Round all floating-point numbers to exactly {decimal_places} decimal places."


def formatting_rules(options: GenerationOptions) -> str:
    date_value = getattr(options.date_format, "value", options.date_format)
    lines = [
        "STRICT FORMATTING RULES:",
        f'1. Date Format: All date fields must strictly follow this format: "{date_value}".',
    ]
    hint = DATE_HINTS.get(options.date_format)
    if hint:
        lines.append(f"   - {hint}")
    lines.append(f"2. Number Precision: {precision_rule(options.decimal_places)}")
    return "\n".join(lines) + "\n"


def compile_system_instruction(fmt: Union[DataFormat, str, None], options: GenerationOptions) -> str:
    return (
        f"{CORE_RULES}\n"
        f"{formatting_rules(options)}\n"
        f"FORMAT SPECIFIC INSTRUCTIONS:\n"
        f"{format_instructions(fmt)}"
    )


def compile_user_content(user_prompt: str, fmt: Union[DataFormat, str, None]) -> str:
    known = _coerce_format(fmt)
    name = known.value if known else DataFormat.TXT.value
    return f'Generate data in {name} format based on this request: "{user_prompt}"'


def compile_prompt(user_prompt: str, fmt: Union[DataFormat, str, None], options: GenerationOptions) -> List[Message]:
    """System instruction + user request, ready for any model client."""
    return [
        Message(role="system", content=compile_system_instruction(fmt, options)),
        Message(role="user", content=compile_user_content(user_prompt, fmt)),
    ]
