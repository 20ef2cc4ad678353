"""Rendering for dinorun snapshots."""

from .renderer import FrameRenderer

__all__ = ["FrameRenderer"]
