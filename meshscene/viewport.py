"""Screen viewports laid out as quadrants of a window."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ViewScreenLocation(Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


_LEFT = {ViewScreenLocation.TOP_LEFT, ViewScreenLocation.BOTTOM_LEFT}
_TOP = {ViewScreenLocation.TOP_LEFT, ViewScreenLocation.TOP_RIGHT}


@dataclass
class Rect:
    """A screen rectangle given by its top-left corner and size."""

    left_top_x: float = 0.0
    left_top_y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class ViewportRect:
    """The area and depth range a viewport renders into."""

    top_left_x: float = 0.0
    top_left_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    min_depth: float = 0.0
    max_depth: float = 0.0


@dataclass
class Viewport:
    """A viewport pinned to one quadrant of the screen."""

    location: ViewScreenLocation | None = None
    viewport: ViewportRect = field(default_factory=ViewportRect)

    def resize_to_screen(self, width: float, height: float) -> None:
        """Fit the viewport to its quadrant of a screen of the given size."""
        half_width = float(width) * 0.5
        half_height = float(height) * 0.5
        if self.location is not None:
            vp = self.viewport
            vp.top_left_x = 0.0 if self.location in _LEFT else half_width
            vp.top_left_y = 0.0 if self.location in _TOP else half_height
            vp.width = half_width
            vp.height = half_height
        self.viewport.min_depth = 0.0
        self.viewport.max_depth = 1.0

    def resize_to_splits(self, top: Rect, bottom: Rect, left: Rect, right: Rect) -> None:
        """Take position and size from the split rectangles bordering the quadrant."""
        if self.location is None:
            return
        horizontal = left if self.location in _LEFT else right
        vertical = top if self.location in _TOP else bottom
        vp = self.viewport
        vp.top_left_x = horizontal.left_top_x
        vp.top_left_y = vertical.left_top_y
        vp.width = horizontal.width
        vp.height = vertical.height

    def resize_to_rect(self, rect: Rect) -> None:
        vp = self.viewport
        vp.top_left_x = rect.left_top_x
        vp.top_left_y = rect.left_top_y
        vp.width = rect.width
        vp.height = rect.height