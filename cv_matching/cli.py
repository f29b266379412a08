"""
Command-line matching of stored CVs against job requirements.

Usage:
    python -m cv_matching --requirements "Python developer with Django" --candidates cvs.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .config import DEFAULT_LOG_LEVEL, MAX_PERCENTAGE, MIN_PERCENTAGE
from .exceptions import CandidateDataError, MatchingError
from .matcher import match_candidates
from .settings import get_settings, load_environment

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def load_candidates(path: Path) -> List[Any]:
    """Read a list of candidates, or an /api/cvs style {"data": [...]} payload."""
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
    if not isinstance(payload, list):
        raise CandidateDataError(f"{path} must contain a list of candidates")
    return payload


def percentage_arg(value: str) -> int:
    number = int(value)
    if not MIN_PERCENTAGE <= number <= MAX_PERCENTAGE:
        raise argparse.ArgumentTypeError(
            f"must be between {MIN_PERCENTAGE} and {MAX_PERCENTAGE}, got {value}"
        )
    return number


def positive_int_arg(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cv_matching",
        description="Rank stored CVs by keyword match against job requirements",
    )
    req = parser.add_mutually_exclusive_group(required=True)
    req.add_argument("--requirements", help="Job requirements text")
    req.add_argument("--requirements-file", type=Path,
                     help="Path to a text file with the job requirements")
    parser.add_argument("--candidates", type=Path, required=True,
                        help="Path to a JSON file with candidate records")
    parser.add_argument("--min-percentage", type=percentage_arg,
                        help="Drop matches below this percentage (or set MATCH_MIN_PERCENTAGE)")
    parser.add_argument("--limit", type=positive_int_arg,
                        help="Maximum matches to print (or set MATCH_MAX_RESULTS)")
    parser.add_argument("--log-level", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Log level (or set MATCH_LOG_LEVEL, default INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_environment()
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=args.log_level or DEFAULT_LOG_LEVEL, format=LOG_FORMAT,
                            stream=sys.stderr, force=True)
        logger.error(f"Invalid MATCH_* settings: {e}")
        return EXIT_INPUT_ERROR

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )

    try:
        if args.requirements_file is not None:
            requirements = args.requirements_file.read_text(encoding="utf-8")
        else:
            requirements = args.requirements
        candidates = load_candidates(args.candidates)
        response = match_candidates(
            requirements,
            candidates,
            min_percentage=args.min_percentage,
            limit=args.limit,
        )
    except (MatchingError, OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Matching failed: {e}")
        return EXIT_INPUT_ERROR

    print(response.model_dump_json(indent=2))
    return EXIT_OK
