#!/usr/bin/env python3
# =============================================================
# cli.py
# -------------------------------------------------------------
# Terminal front-end for the same pipeline the web page uses.
#
#   dummydata generate "5 users with name and email" --format CSV
#   dummydata generate "3 orders" --format JSON --decimals 2 --output out/ --copy
#   dummydata examples
#
# Chunks are written to stdout as they arrive.
# Exit codes: 0 ok, 1 upstream failure, 2 invalid input / configuration.
# =============================================================

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .errors import EmptyPromptError, InvalidOptionError, MissingApiKeyError
from .export import build_download, copy_to_clipboard
from .generate import DataGenerator, build_model_client
from .generate.clients import PROVIDERS
from .logging_setup import configure_logging
from .session import GenerationSession
from .settings import settings
from .types import DECIMAL_CHOICES, EXAMPLE_PROMPTS, DataFormat, DateFormat, GenerationOptions

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="dummydata", description="Generate structured dummy data from a description.")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Stream generated data to stdout")
    g.add_argument("prompt", nargs="?", default="", help="Natural-language description of the data")
    g.add_argument("--example", help="Use a quick example instead of a prompt (e.g. 'Sensor Data')")
    g.add_argument("--format", "-f", default=DataFormat.JSON.value, choices=[f.value for f in DataFormat],
                   type=str.upper)
    g.add_argument("--date-format", default=DateFormat.ISO_8601.value, choices=[d.value for d in DateFormat])
    g.add_argument("--decimals", default="default", choices=list(DECIMAL_CHOICES))
    g.add_argument("--output", "-o", help="Directory to save dummy-data.<ext> into")
    g.add_argument("--copy", action="store_true", help="Copy the result to the system clipboard")
    g.add_argument("--provider", choices=list(PROVIDERS), help="Override LLM_PROVIDER")
    g.add_argument("--model", help="Override the provider's model name")

    sub.add_parser("examples", help="List the quick example prompts")
    return p.parse_args(argv)


def _cmd_examples() -> int:
    for ex in EXAMPLE_PROMPTS:
        print(f"{ex.label:<14} {ex.text}")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    session = GenerationSession()
    try:
        if args.example:
            session.apply_example(args.example)
            prompt = session.prompt
        else:
            prompt = args.prompt
        fmt = DataFormat.parse(args.format)
        options = GenerationOptions.parse(args.date_format, args.decimals)
        session.begin(prompt, fmt, options)
    except (EmptyPromptError, InvalidOptionError) as e:
        print(f"!! {e}", file=sys.stderr)
        return 2

    cfg = settings.model_copy(update={"LLM_PROVIDER": args.provider}) if args.provider else settings
    try:
        client = build_model_client(cfg)
    except (MissingApiKeyError, ValueError) as e:
        print(f"!! {e}", file=sys.stderr)
        return 2
    if args.model:
        client.set_model(args.model)

    def echo(chunk: str) -> None:
        sys.stdout.write(chunk)
        sys.stdout.flush()

    gen = DataGenerator(model_client=client)
    logger.debug("cli generate provider=%s model=%s", cfg.LLM_PROVIDER, getattr(client, "model", None))
    session.run(gen, on_chunk=echo)

    if session.generated_text and not session.generated_text.endswith("\n"):
        sys.stdout.write("\n")
    if session.error:
        print(f"!! {session.error}", file=sys.stderr)
        return 1

    if args.output:
        file = build_download(session.generated_text, session.format)
        if file is not None:
            path = file.save(args.output)
            print(f">> saved {path} ({file.mime_type}, {len(file.data)} bytes)", file=sys.stderr)
    if args.copy and copy_to_clipboard(session.generated_text):
        print(">> copied to clipboard", file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    if args.command == "examples":
        return _cmd_examples()
    return _cmd_generate(args)


if __name__ == "__main__":
    raise SystemExit(main())
