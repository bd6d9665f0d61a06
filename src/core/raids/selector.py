"""Selection policies narrowing each player's variant results.

Sorting relies on ``sorted`` being stable: results with equal keys keep their
catalog order, so ties resolve to the variant declared first.
"""

from __future__ import annotations

from collections.abc import Callable

from src.contracts.raids import HelperMethod, PlayerRaidResult, RaidResult, TeamVariantResult

Results = tuple[TeamVariantResult, ...]


def keep_full(results: Results) -> Results:
    return results


def keep_doable(results: Results) -> Results:
    """Only teams with total achievement = 100%."""
    return tuple(r for r in results if r.total == 100)


def keep_best(results: Results) -> Results:
    """Single best team by total achievement % * expected damage %."""
    ranked = sorted(results, key=lambda r: r.weighted_score, reverse=True)
    return tuple(ranked[:1])


def keep_closer(results: Results) -> Results:
    """Single closest team by total achievement %, damage breaking ties."""
    if not results:
        return ()

    top = max(r.total for r in results)
    closest = [r for r in results if r.total == top]
    ranked = sorted(closest, key=lambda r: r.percent_damage, reverse=True)
    return tuple(ranked[:1])


_POLICIES: dict[HelperMethod, Callable[[Results], Results]] = {
    HelperMethod.FULL: keep_full,
    HelperMethod.DOABLE: keep_doable,
    HelperMethod.BEST: keep_best,
    HelperMethod.CLOSER: keep_closer,
}


def select_results(result: RaidResult, method: HelperMethod) -> RaidResult:
    """Apply a selection policy to every player independently."""
    policy = _POLICIES[method]

    players = tuple(
        PlayerRaidResult(name=player.name, variant_results=policy(player.variant_results))
        for player in result.players
    )
    return RaidResult(raid=result.raid, players=players)


def parse_method(args: list[str]) -> HelperMethod:
    """Pick the reporting method from command arguments (default: closer)."""
    tokens = {arg.lower() for arg in args}
    for method in (HelperMethod.DOABLE, HelperMethod.FULL, HelperMethod.BEST):
        if method.value in tokens:
            return method
    return HelperMethod.CLOSER
