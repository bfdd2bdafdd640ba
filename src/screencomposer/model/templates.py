"""Screen Templates (Catalog) - backgrounds, text slots and styles per mode."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Mode(StrEnum):
    """Which template is active. Exactly one at a time."""
    DASHBOARD = "dashboard"
    LOGIN = "login"

class Align(StrEnum):
    CENTER = "center"
    LEFT = "left"

class Baseline(StrEnum):
    MIDDLE = "middle"


GENDER_OPTIONS: tuple[str, ...] = ("MR", "MRS", "MS")

# Export name used when the window runs with the dashboard template only
SINGLE_MODE_EXPORT_NAME = "money_in_the_bank.png"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class TextStyle:
    font_size_px: int
    color_hex: str
    # CSS-style numeric weight (100..900)
    font_weight: int
    font_family: str


@dataclass(frozen=True)
class ExclusionZone:
    """
    Vertical line (as a fraction of the image width) left of which text may not start.
    Keeps variable-length text off fixed artwork in the background.
    """
    boundary_fraction: float

    def boundary_px(self, image_width: float) -> float:
        return image_width * self.boundary_fraction


@dataclass(frozen=True)
class TextSlot:
    """
    One piece of text drawn on a template.

    The anchor is resolved against the background size as
    (width * anchor_x + offset_x, height * anchor_y + offset_y).
    """
    name: str
    anchor_x: float
    anchor_y: float
    style: TextStyle
    text_template: str
    align: Align = Align.CENTER
    offset_x: float = 0.0
    offset_y: float = 0.0
    exclusion_zone: Optional[ExclusionZone] = None
    uppercase: bool = False

    def resolve_anchor(self, width: int, height: int) -> tuple[float, float]:
        return (
            width * self.anchor_x + self.offset_x,
            height * self.anchor_y + self.offset_y,
        )

    def render_text(self, values: dict[str, str]) -> str:
        text = self.text_template.format(**values)
        return text.upper() if self.uppercase else text


@dataclass(frozen=True)
class TemplateSpec:
    mode: Mode
    label: str
    background_file: str
    export_filename: str
    slots: tuple[TextSlot, ...]


# ------------------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------------------
# Positions are tuned against the shipped artwork; change them together with it.
_INTER_LIGHT_WHITE = dict(color_hex="#FFFFFF", font_weight=300, font_family="Inter")

DASHBOARD_TEMPLATE = TemplateSpec(
    mode=Mode.DASHBOARD,
    label="Dashboard",
    background_file="Template_3.jpg",
    export_filename="money_in_the_bank.png",
    slots=(
        # Main amount, on the same line as the printed "XCG"
        TextSlot(
            name="amount",
            anchor_x=0.5,
            anchor_y=0.5,
            offset_y=-5.0,
            style=TextStyle(font_size_px=74, **_INTER_LIGHT_WHITE),
            text_template="{amount}",
            align=Align.CENTER,
            exclusion_zone=ExclusionZone(boundary_fraction=0.42),
        ),
        # "Current Balance" duplicate
        TextSlot(
            name="balance",
            anchor_x=0.5,
            anchor_y=0.687,
            style=TextStyle(font_size_px=32, **_INTER_LIGHT_WHITE),
            text_template="XCG {amount}",
            align=Align.LEFT,
        ),
    ),
)

LOGIN_TEMPLATE = TemplateSpec(
    mode=Mode.LOGIN,
    label="Login",
    background_file="Login_Template.jpg",
    export_filename="login_welcome.png",
    slots=(
        # Above "Login with another user"
        TextSlot(
            name="welcome",
            anchor_x=0.5,
            anchor_y=0.55,
            style=TextStyle(font_size_px=28, color_hex="#004080", font_weight=200, font_family="Inter"),
            text_template="{gender} {name}",
            align=Align.CENTER,
            uppercase=True,
        ),
    ),
)

TEMPLATES: dict[Mode, TemplateSpec] = {
    Mode.DASHBOARD: DASHBOARD_TEMPLATE,
    Mode.LOGIN: LOGIN_TEMPLATE,
}
