"""Tests for mode classification: first matching rule wins."""

import pytest

from monolith.modes import ModeKind, determine_mode


@pytest.mark.parametrize(
    "flag, name, index, expected",
    [
        # Beta beats Gamma even for a negative index
        (True, "alpha", -5, ModeKind.BETA),
        (True, "alpha", 0, ModeKind.BETA),
        # Alpha beats Gamma
        (False, "alpha", -1, ModeKind.ALPHA),
        # Short name falls through to Gamma
        (False, "abc", -1, ModeKind.GAMMA),
        (False, None, -2, ModeKind.GAMMA),
        (True, "alpha", -3, ModeKind.GAMMA),
        (True, "alpha", 3, ModeKind.UNKNOWN),
        (False, "", 4, ModeKind.UNKNOWN),
        (False, "abc", 0, ModeKind.UNKNOWN),
    ],
)
def test_determine_mode(flag, name, index, expected):
    assert determine_mode(flag, name, index) == expected


def test_delta_is_never_selected():
    kinds = {
        determine_mode(flag, name, index)
        for flag in (True, False)
        for name in (None, "", "ab", "alpha")
        for index in range(-12, 12)
    }
    assert ModeKind.DELTA not in kinds
