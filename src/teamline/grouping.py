"""Group ordering helpers.

The grid assembler consumes groups in whatever order it is given; these
helpers build that order the usual way: leading groups (customers,
milestones) first, then owners alphabetically, with unassigned work last.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Literal

from .models import Interval, IntervalGroup
from .normalize import UNASSIGNED_GROUP

GroupOrder = Literal["alpha", "input"]


def group_intervals(intervals: Iterable[Interval]) -> dict[str, list[Interval]]:
    """Bucket intervals by group key, keeping first-seen group order."""
    groups: dict[str, list[Interval]] = {}
    for interval in intervals:
        if interval.group_key not in groups:
            groups[interval.group_key] = []
        groups[interval.group_key].append(interval)
    return groups


def ordered_keys(
    keys: Iterable[str],
    *,
    leading: Sequence[str] = (),
    order: GroupOrder = "alpha",
    labels: Mapping[str, str] | None = None,
) -> list[str]:
    """Order group keys: leading keys as listed, then the rest, unassigned last."""
    labels = labels or {}
    keys = list(keys)
    present = set(keys)

    head = [key for key in leading if key in present]
    rest = [key for key in keys if key not in head and key != UNASSIGNED_GROUP]
    if order == "alpha":
        rest = sorted(rest, key=lambda key: labels.get(key, key))
    if UNASSIGNED_GROUP in present and UNASSIGNED_GROUP not in head:
        rest.append(UNASSIGNED_GROUP)

    return head + rest


def build_groups(  # noqa: PLR0913 - grouping options are independent keyword flags
    intervals: Iterable[Interval],
    *,
    leading: Sequence[str] = (),
    order: GroupOrder = "alpha",
    labels: Mapping[str, str] | None = None,
    colors: Mapping[str, str] | None = None,
    unpacked: Iterable[str] = (),
    label_by_first_interval: Iterable[str] = (),
) -> list[IntervalGroup]:
    """Bucket intervals into ordered ``IntervalGroup`` objects.

    Args:
        intervals: Normalized intervals in input order
        leading: Group keys that come first, in this order
        order: "alpha" sorts the remaining groups by label, "input" keeps first-seen order
        labels: Display label per group key (defaults to the key)
        colors: Fixed bar color per group key
        unpacked: Group keys whose intervals each get their own row
        label_by_first_interval: Group keys whose rows are labeled by their first interval

    Returns:
        Groups in display order
    """
    labels = labels or {}
    colors = colors or {}
    unpacked_keys = set(unpacked)
    first_label_keys = set(label_by_first_interval)

    buckets = group_intervals(intervals)
    return [
        IntervalGroup(
            key=key,
            label=labels.get(key, key),
            intervals=buckets[key],
            color=colors.get(key),
            pack=key not in unpacked_keys,
            label_by_first_interval=key in first_label_keys,
        )
        for key in ordered_keys(buckets, leading=leading, order=order, labels=labels)
    ]
