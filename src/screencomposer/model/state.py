"""
Application State (Data Model)
==============================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the active mode, the canonical field values, the
   loaded background and the cached composite in one place.
2. Decoupling: Views read from this object; the render controller writes to it.

Classes:
    RenderStage: Where the active mode is in its load/render lifecycle.
    AppState: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, TYPE_CHECKING

from screencomposer.model.templates import Mode, GENDER_OPTIONS, TEMPLATES, TemplateSpec

if TYPE_CHECKING:
    from PySide6.QtGui import QImage

logger = logging.getLogger(__name__)


class RenderStage(IntEnum):
    NO_IMAGE = 0
    IMAGE_LOADED = 1
    COMPOSITED = 2


@dataclass
class AppState:
    """
    Singleton-like class that holds everything the render pass needs.
    Owned by the RenderController.
    """
    mode: Mode = Mode.DASHBOARD

    # Canonical (already normalized) field values
    amount: str = ""
    gender: str = GENDER_OPTIONS[0]
    name: str = ""

    background: Optional[QImage] = None
    composite: Optional[QImage] = None
    stage: RenderStage = RenderStage.NO_IMAGE
    load_error: Optional[str] = None

    @property
    def template(self) -> TemplateSpec:
        return TEMPLATES[self.mode]

    def text_values(self) -> dict[str, str]:
        """Values substituted into the slot text templates."""
        return {
            "amount": self.amount or "0",
            "gender": self.gender,
            "name": self.name,
        }

    def discard_composite(self) -> None:
        self.composite = None
        if self.stage == RenderStage.COMPOSITED:
            self.stage = RenderStage.IMAGE_LOADED

    def reset_background(self) -> None:
        """Forget the background and composite, e.g. before loading another template."""
        self.background = None
        self.composite = None
        self.load_error = None
        self.stage = RenderStage.NO_IMAGE
        logger.debug(f"Background reset for mode '{self.mode}'.")
