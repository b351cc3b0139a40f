import argparse
import contextlib
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from .config import Config
from .exceptions import InputTooLargeError, JSONRepairError
from .processing import JSONRepairer
from .utils import TextUtils, dumps_pretty, safe_loads


def setup_logging():
    """Configure application logging."""
    logger.remove()
    _ = logger.add(sys.stderr, level=Config.LOG_LEVEL)
    if not Config.LOG_FILE:
        return
    with contextlib.suppress(OSError):
        Path(Config.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

    _ = logger.add(
        Config.LOG_FILE,
        level="DEBUG",
        rotation="10 MB",
        retention="10 days",
        enqueue=True,
        backtrace=True,
        diagnose=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-repair",
        description="Recover strict JSON from language-model output.",
    )
    parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    parser.add_argument(
        "--max-chars",
        type=int,
        default=Config.MAX_INPUT_CHARS,
        help="Reject input longer than this many characters (0 = no limit)",
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=Config.REPAIR_MIN_LENGTH,
        help="Shortest prefix the recoverer may return",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent the repaired JSON")
    return parser


def _read_input(path: Optional[str]) -> str:
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read model output, print repaired JSON. Exit 1 on repair failure, 2 on I/O problems."""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        raw = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return 2

    try:
        TextUtils.enforce_size_limit(raw, args.max_chars)
        result = JSONRepairer(min_length=args.min_length).repair(raw)
    except InputTooLargeError as e:
        print(str(e), file=sys.stderr)
        return 2
    except JSONRepairError as e:
        logger.debug(f"[cli] repair failed: {type(e).__name__}")
        print(str(e), file=sys.stderr)
        return 1

    output = dumps_pretty(safe_loads(result.text)) if args.pretty else result.text
    print(output)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
