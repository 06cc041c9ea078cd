"""Outcome formatter for the resolve CLI."""

import json
from typing import Any, TextIO

from clientip.core.resolver import Ambiguous, Resolved, ResolutionOutcome


def outcome_to_dict(outcome: ResolutionOutcome) -> dict[str, Any]:
    if isinstance(outcome, Resolved):
        return {"status": "resolved", "ip": str(outcome.ip), "source": outcome.source}
    if isinstance(outcome, Ambiguous):
        return {"status": "ambiguous", "headers": list(outcome.headers)}
    return {"status": "unresolved"}


class OutcomeFormatter:
    """Prints an outcome and the tags it produced."""

    def __init__(self, output: TextIO, as_json: bool = False):
        self.output = output
        self.as_json = as_json

    def show(self, outcome: ResolutionOutcome, tags: dict[str, Any]) -> None:
        data = outcome_to_dict(outcome)
        if self.as_json:
            data["tags"] = tags
            self._print(json.dumps(data, indent=2, sort_keys=True) + "\n")
            return

        if isinstance(outcome, Resolved):
            self._print(f"✅ {outcome.ip} (from {outcome.source})\n")
        elif isinstance(outcome, Ambiguous):
            self._print(f"⚠️  Ambiguous: {outcome.header_list}\n")
        else:
            self._print("❔ Unresolved\n")

        for key in sorted(tags):
            self._print(f"  {key} = {tags[key]}\n")

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
