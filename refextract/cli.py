"""Command-line entry points for the hybrid and one-shot extractors."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from refextract.config import settings
from refextract.errors import ExtractionError, NormalizationError
from refextract.export import write_csv, write_json
from refextract.extraction.normalizers import LLMNormalizer, RulesNormalizer
from refextract.extraction.one_shot import OneShotExtractor
from refextract.extraction.pipeline import HybridPipeline

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _report(exc: ExtractionError) -> int:
    logger.error("Fatal error in stage %s: %s", exc.stage, exc)
    if isinstance(exc, NormalizationError) and exc.raw is not None:
        logger.error("Raw output was: %s", exc.raw)
    return 1


def build_hybrid_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Page-true parsing + regex candidates + LLM normalization."
    )
    parser.add_argument("pdf", help="Path to the input PDF")
    parser.add_argument("--out", default=settings.output_json, help="JSON output path")
    parser.add_argument("--csv", default=settings.output_csv, help="Optional CSV output path")
    parser.add_argument("--no-llm", action="store_true", help="Rules-only normalization")
    parser.add_argument("--batch", type=positive_int, default=settings.batch_size, help="Candidates per model call")
    return parser


def build_one_shot_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send a PDF to the model and get structured JSON of references."
    )
    parser.add_argument("pdf", help="Path to the input PDF")
    parser.add_argument("--out", default="refs.json", help="JSON output path")
    parser.add_argument("--csv", default=None, help="Optional CSV output path")
    return parser


def hybrid_main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_hybrid_parser().parse_args(argv)
    try:
        normalizer = RulesNormalizer() if args.no_llm else LLMNormalizer(batch_size=args.batch)
        result = HybridPipeline(normalizer).run(args.pdf)
    except ExtractionError as exc:
        return _report(exc)
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    write_json(result.references, args.out)
    if args.csv:
        write_csv(result.references, args.csv)
    return 0


def one_shot_main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_one_shot_parser().parse_args(argv)
    try:
        references = OneShotExtractor().extract(args.pdf)
    except ExtractionError as exc:
        return _report(exc)
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    write_json(references, args.out)
    if args.csv:
        write_csv(references, args.csv)
    return 0


def main() -> None:
    sys.exit(hybrid_main())


if __name__ == "__main__":
    main()
