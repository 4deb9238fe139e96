"""Weighted cluster entries for traffic splits."""

from __future__ import annotations

from collections.abc import Mapping

from kourier.envoy.headers import headers_to_add

_UINT32_MAX = 2**32 - 1


def new_weighted_cluster(
    name: str, traffic_perc: int, headers: Mapping[str, str] | None
) -> dict:
    """Create a cluster weight entry carrying ``traffic_perc`` of the traffic."""
    if not 0 <= traffic_perc <= _UINT32_MAX:
        raise ValueError(f"weight {traffic_perc} out of range")
    return {
        "name": name,
        "weight": traffic_perc,
        "request_headers_to_add": headers_to_add(headers),
    }