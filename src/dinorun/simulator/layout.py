"""Responsive viewport fitting for hosts.

Desktop layouts use a 3:1 play area capped at the 1200px reference width;
compact (phone-sized) layouts use 2.5:1 capped at 800px and shrink to fit
the available height.
"""

from typing import Tuple

from dinorun.engine.entities import Viewport

REFERENCE_WIDTH = 1200.0
DESKTOP_ASPECT = 3.0
COMPACT_ASPECT = 2.5
COMPACT_MAX_WIDTH = 800.0


def fit_viewport(
    area_width: float,
    area_height: float,
    compact: bool = False,
) -> Tuple[Viewport, float]:
    """Pick a viewport and scale factor for the available area.

    Args:
        area_width: Width available to the game
        area_height: Height available to the game
        compact: Use the phone-sized layout

    Returns:
        (viewport, scale) where scale is relative to ``REFERENCE_WIDTH``
    """
    if compact:
        width = min(area_width - 20, COMPACT_MAX_WIDTH)
        height = width / COMPACT_ASPECT
        if height > area_height - 20:
            height = area_height - 20
            width = height * COMPACT_ASPECT
    else:
        width = min(area_width - 40, REFERENCE_WIDTH)
        height = width / DESKTOP_ASPECT

    viewport = Viewport(width, height).clamped()
    return viewport, viewport.width / REFERENCE_WIDTH
