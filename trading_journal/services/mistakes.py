"""Mistake attribution: how trades tagged with each mistake performed."""

from dataclasses import dataclass
from typing import Any, Iterable

from trading_journal.services.analytics import Outcome, classify_outcome, realised_r


@dataclass
class MistakeStats:
    mistake: str
    trades: int = 0
    wins: int = 0
    losses: int = 0
    total_r: float = 0.0
    expectancy: float = 0.0  # mean R per tagged trade


def calculate_mistake_stats(trades: Iterable[Any]) -> list[MistakeStats]:
    """Rollup per mistake tag, in first-seen order.

    A trade counts once in every bucket it is tagged with; untagged trades
    contribute nothing.
    """
    buckets: dict[str, MistakeStats] = {}
    for t in trades:
        tags = getattr(t, "mistakes", None) or []
        if not tags:
            continue
        r = realised_r(t)
        outcome = classify_outcome(r)
        for tag in tags:
            stats = buckets.setdefault(tag, MistakeStats(mistake=tag))
            stats.trades += 1
            stats.total_r += r
            if outcome is Outcome.WIN:
                stats.wins += 1
            elif outcome is Outcome.LOSS:
                stats.losses += 1

    for stats in buckets.values():
        stats.expectancy = stats.total_r / stats.trades if stats.trades else 0.0
    return list(buckets.values())
