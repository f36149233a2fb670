from __future__ import annotations

from typing import Sequence

from ..errors import EmptyGroup, UnsupportedTopology
from ..schemas import Member


def validate_topology(members: Sequence[Member], selector: str, supported_sizes: Sequence[int]) -> None:
    """
    Only the cluster shapes the data store is deployed in are resettable:
    - no members at all is not an error condition for the run (EmptyGroup)
    - any other count outside `supported_sizes` aborts before mutation
    """
    if not members:
        raise EmptyGroup(selector)
    if len(members) not in supported_sizes:
        raise UnsupportedTopology(len(members), sorted(supported_sizes))
