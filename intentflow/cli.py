"""CLI entrypoint: decide the intent of one utterance and print it."""

import argparse
import asyncio
import json
import logging
from typing import List, Optional

from intentflow.config.settings import settings
from intentflow.domain.models import create_empty_user
from intentflow.services.pipeline import IntentPipeline


async def run(text: str, phrases: List[str], debug: bool) -> dict:
    pipeline = IntentPipeline(phrases)
    if debug:
        pipeline.turn_on_debug()
    user = await pipeline.process(create_empty_user(), text)
    return user.intent.model_dump(exclude_none=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Decide the intent expressed by a piece of text.")
    parser.add_argument("text", help="Utterance to classify, e.g. 'flying to paris tomorrow'")
    parser.add_argument(
        "--phrases",
        action="append",
        default=[],
        help="Extra phrase file or directory (repeatable). The built-in phrases are always included.",
    )
    parser.add_argument("--debug", action="store_true", help="Log classifications and candidate intents.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else settings.log_level)
    intent = asyncio.run(run(args.text, args.phrases, args.debug or settings.debug))
    print(json.dumps(intent, indent=2))


if __name__ == "__main__":
    main()
