"""One-shot client IP resolution from the command line."""

import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from clientip.configs.system import ClientIPConfig
from clientip.core.resolver import ClientIPResolver, Resolved
from clientip.core.tags import DictTagTarget, apply_outcome

from .formatter import OutcomeFormatter

logger = logging.getLogger(__name__)

EXIT_RESOLVED = 0
EXIT_NOT_RESOLVED = 1
EXIT_USAGE = 2


def parse_header_arg(arg: str) -> tuple[str, str]:
    """Split a ``'Name: value'`` argument, as curl's ``-H`` takes it."""
    name, sep, value = arg.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Malformed header {arg!r}, expected 'Name: value'")
    return name.strip(), value.strip()


class ResolveCLI:
    """Resolve one set of headers and print the outcome."""

    def __init__(
        self,
        config: ClientIPConfig,
        output_stream: TextIO = sys.stdout,
        as_json: bool = False,
    ):
        self.resolver = ClientIPResolver(config)
        self.formatter = OutcomeFormatter(output_stream, as_json=as_json)

    def run(self, headers: list[tuple[str, str]], remote_addr: str | None) -> int:
        """Resolve, print, and return the process exit status."""
        outcome = self.resolver.resolve(headers, remote_addr)
        target = DictTagTarget()
        apply_outcome(target, outcome)
        self.formatter.show(outcome, target.tags)
        return EXIT_RESOLVED if isinstance(outcome, Resolved) else EXIT_NOT_RESOLVED


def main(
    headers: list[str],
    remote_addr: str | None = None,
    override_header: str | None = None,
    header_priority: str | None = None,
    fallback: bool = False,
    as_json: bool = False,
    debug: bool = False,
    output_stream: TextIO = sys.stdout,
) -> int:
    """Main entry point for the CLI; returns the exit status."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        pairs = [parse_header_arg(arg) for arg in headers]
        settings: dict = {
            "override_header": override_header,
            "fallback_to_remote_addr": fallback,
        }
        if header_priority is not None:
            settings["header_priority"] = header_priority.split(",")
        config = ClientIPConfig(**settings)
    except (ValueError, ValidationError) as e:
        sys.stderr.write(f"error: {e}\n")
        return EXIT_USAGE

    return ResolveCLI(config, output_stream, as_json=as_json).run(pairs, remote_addr)
