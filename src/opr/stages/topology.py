from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple, Union

from ..cluster import ClusterQuery
from ..logger import EventLogger
from ..schemas import Member
from ..validators.topology_validator import validate_topology

_TRAILING_DIGITS = re.compile(r"(\d+)$")
_CHUNKS = re.compile(r"(\d+)")


def parse_ordinal(name: str) -> Optional[int]:
    m = _TRAILING_DIGITS.search(name)
    return int(m.group(1)) if m else None


def natural_key(name: str) -> Tuple[Tuple[int, Union[int, str]], ...]:
    """Version-aware key: `node-2` sorts before `node-10`."""
    return tuple((0, int(c)) if c.isdigit() else (1, c) for c in _CHUNKS.split(name) if c)


def order_members(names: Sequence[str]) -> List[Member]:
    members = [Member(name=n, ordinal=parse_ordinal(n)) for n in names if n]
    # names without an ordinal go last; ties fall back to the natural key
    members.sort(key=lambda m: (
        m.ordinal is None,
        m.ordinal if m.ordinal is not None else 0,
        natural_key(m.name),
    ))
    return members


def discover_members(
    query: ClusterQuery,
    selector: str,
    supported_sizes: Sequence[int],
    logger: EventLogger,
) -> List[Member]:
    """
    Read-only discovery of the ordinal group.

    The returned order is computed once here and is never re-evaluated,
    even if the live set changes while the reset is in progress.
    """
    names = query.list_members(selector)
    members = order_members(names)
    logger.log("topology", "discovered", {"selector": selector, "members": [m.name for m in members]})
    validate_topology(members, selector, supported_sizes)
    return members
