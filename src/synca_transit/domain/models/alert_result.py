"""Result of a delay alert check."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AlertResult:
    """Outcome of one delay alert check."""

    disrupted_lines: list[str] = field(default_factory=list)
    notified_lines: list[str] = field(default_factory=list)
    sent: bool = False
