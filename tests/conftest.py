from __future__ import annotations

import pytest


FOUR_LEG_NOTES = "\n".join(
	[
		"[NFL] Kansas City Chiefs -3.5 (-110) - Chiefs vs Raiders",
		"[NFL] Buffalo Bills -2.5 (-110) - Bills vs Jets",
		"[NBA] Boston Celtics +4.5 (-110) - Celtics vs Knicks",
		"[NBA] Denver Nuggets -1.5 (-110) - Nuggets vs Suns",
		"League: Mixed",
		"Category: Round Robin",
	]
)


@pytest.fixture
def four_leg_notes() -> str:
	return FOUR_LEG_NOTES
