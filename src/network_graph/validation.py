from __future__ import annotations

import math
from collections.abc import Iterable

from .errors import ValidationError
from .models import LINK_TYPES, NODE_TYPES, NetworkData, NetworkLink, NetworkNode


def _check_weight(label: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number, got {value!r}")
    if math.isnan(value) or value < 0:
        raise ValidationError(f"{label} must be non-negative, got {value!r}")


def validate(data: NetworkData) -> NetworkData:
    seen: set[str] = set()
    for node in data.nodes:
        if node.id in seen:
            raise ValidationError(f"duplicate node id {node.id!r}")
        seen.add(node.id)
        if node.type not in NODE_TYPES:
            raise ValidationError(f"node {node.id!r} has unknown type {node.type!r}")
        _check_weight(f"size of node {node.id!r}", node.size)

    for idx, link in enumerate(data.links):
        for endpoint in (link.source, link.target):
            if endpoint not in seen:
                raise ValidationError(f"link #{idx} references missing node {endpoint!r}")
        if link.type not in LINK_TYPES:
            raise ValidationError(f"link #{idx} has unknown type {link.type!r}")
        _check_weight(f"value of link #{idx}", link.value)

    return data


def build_network_data(nodes: Iterable[NetworkNode], links: Iterable[NetworkLink]) -> NetworkData:
    return validate(NetworkData(nodes=tuple(nodes), links=tuple(links)))
