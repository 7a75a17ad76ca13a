"""Run trace passed explicitly through the stitch engine."""

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class Trace:
    """Collects diagnostics for one stitch or rip run.

    Events are verbose diagnostics; warnings flag degraded results that the
    caller should surface. An optional echo callable receives each event as
    it is recorded.
    """

    echo: Optional[Callable[[str], None]] = None
    events: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def note(self, message: str) -> None:
        self.events.append(message)
        if self.echo is not None:
            self.echo(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
