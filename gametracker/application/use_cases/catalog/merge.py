"""Merge catalog hits from several providers into one de-duplicated list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from gametracker.domain.entities import MergedResult, ProviderResult

# Fields copied from other same-name hits when the first hit has no value.
GAP_FILL_FIELDS: tuple[str, ...] = ("external_pricing_id", "cover_url", "release_date")


def merge_provider_results(
    batches: Iterable[Sequence[ProviderResult]],
) -> list[MergedResult]:
    """Merge ``batches`` (one per provider, in priority order).

    The first hit for each case-insensitive name wins and keeps its position.
    Each empty gap-fill field is then taken from the first hit in the whole
    pool with the same name and a non-null value, including hits that were
    dropped as duplicates.
    """

    pool = [result for batch in batches for result in batch]

    seen: set[str] = set()
    seeds: list[ProviderResult] = []
    for result in pool:
        key = result.name_key
        if key in seen:
            continue
        seen.add(key)
        seeds.append(result)

    return [_fill_gaps(seed, pool) for seed in seeds]


def _fill_gaps(seed: ProviderResult, pool: Sequence[ProviderResult]) -> MergedResult:
    merged = MergedResult.from_provider_result(seed)
    changes: dict[str, object] = {}
    for field_name in GAP_FILL_FIELDS:
        if getattr(merged, field_name) is not None:
            continue
        for candidate in pool:
            if candidate.name_key != seed.name_key:
                continue
            value = getattr(candidate, field_name)
            if value is not None:
                changes[field_name] = value
                break
    return merged.with_values(**changes) if changes else merged


__all__ = ["GAP_FILL_FIELDS", "merge_provider_results"]
