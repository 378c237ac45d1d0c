"""Mode classification for a single item step.

Provides the ModeKind enum and the ordered rules that pick one for a given
flag, name and index.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from monolith.intmath import cmod


class ModeKind(str, Enum):
    """Per-item mode selected by determine_mode()."""

    UNKNOWN = "unknown"
    ALPHA = "alpha"
    BETA = "beta"
    GAMMA = "gamma"
    DELTA = "delta"


def determine_mode(flag: bool, name: Optional[str], index: int) -> ModeKind:
    """Classify an item step into a ModeKind.

    Rules are checked in order and the first match wins: Beta, then Alpha,
    then Gamma.  Nothing ever yields Delta.

    Args:
        flag: Run flag.
        name: Run name, may be None.
        index: Index returned by process_item for this step.

    Returns:
        ModeKind enum value.
    """
    if flag and cmod(index, 5) == 0:
        return ModeKind.BETA
    if not flag and name and len(name) > 3:
        return ModeKind.ALPHA
    if index < 0:
        return ModeKind.GAMMA
    return ModeKind.UNKNOWN
