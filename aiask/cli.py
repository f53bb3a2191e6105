import sys
import asyncio
import logging
from typing import List, Optional, Tuple

import fire  # type: ignore
from prompt_toolkit import prompt

from aiask.config import Settings
from aiask.errors import AiAskError
from aiask.display import TerminalSink
from aiask.search import should_use_web_search
from aiask.orchestrator import StreamResult, stream_answer
from aiask.client import build_request, effective_model, open_stream

USAGE = """Usage: aiask [--search|-s] [--no-search|-n] [--raw] [--verbose] <command>
  --search, -s     Force web search
  --no-search, -n  Disable web search
  --raw            Print the answer without markdown rendering
  --verbose        Log the model and search decision to stderr"""

logger = logging.getLogger("aiask")


def setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[AI] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def read_command(words: tuple[str, ...]) -> str:
    if words:
        return " ".join(str(word) for word in words).strip()
    if sys.stdin.isatty():
        return str(prompt("Ask (Esc then Enter to send):\n", multiline=True)).strip()
    return sys.stdin.read().strip()


async def ask(
    command: str,
    settings: Settings,
    sink: TerminalSink,
    force_search: bool = False,
    no_search: bool = False,
) -> StreamResult:
    use_search = should_use_web_search(command, force_search, no_search)
    logger.info(f"Using model: {effective_model(settings.model, use_search)}")
    logger.info(f"Web search: {'enabled' if use_search else 'disabled'}")
    payload = build_request(command, settings, use_search)
    async with open_stream(payload, settings) as stream:
        return await stream_answer(stream, sink)


def main(
    *words: str,
    search: bool = False,
    no_search: bool = False,
    raw: bool = False,
    verbose: Optional[bool] = None,
) -> None:
    command = read_command(words)
    if not command:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    try:
        settings = Settings.from_env()
        setup_logging(settings.verbose if verbose is None else verbose)
        sink = TerminalSink.for_stream(sys.stdout, raw=raw)
        asyncio.run(ask(command, settings, sink, force_search=search, no_search=no_search))
    except AiAskError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


FLAG_ALIASES = {
    "--search": "search",
    "-s": "search",
    "--no-search": "no_search",
    "--no_search": "no_search",
    "-n": "no_search",
    "--raw": "raw",
    "--verbose": "verbose",
}


def split_flags(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    Pull the boolean flags out of argv wherever they appear.

    Fire binds the token after a flag as its value, so the flags are passed
    back as explicit `--name=True` after the question words.
    """
    flags: List[str] = []
    words: List[str] = []
    for arg in argv:
        name = FLAG_ALIASES.get(arg)
        if name is None:
            words.append(arg)
        elif f"--{name}=True" not in flags:
            flags.append(f"--{name}=True")
    return words, flags


def run(argv: Optional[List[str]] = None) -> None:
    words, flags = split_flags(sys.argv[1:] if argv is None else argv)
    fire.Fire(main, command=words + flags)


if __name__ == "__main__":
    run()
