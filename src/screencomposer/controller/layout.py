"""
Text Layout
===========
Computes where each text slot is drawn, using live font metrics so that
variable-length text can be pushed clear of fixed artwork in the background.

Classes:
    Anchor: Resolved pixel anchor of a slot.
    DrawInstruction: Text + position + style, ready for the compositor.
    TextMeasurer: Protocol for anything that can measure rendered text width.
    QtTextMeasurer: QFontMetricsF-backed measurer.

Functions:
    build_font: TextStyle -> QFont.
    layout: Position a single piece of text.
    layout_template: Position every slot of a template.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Protocol

from PySide6.QtGui import QFont, QFontMetricsF

from screencomposer.model.templates import Align, Baseline, ExclusionZone, TemplateSpec, TextStyle

logger = logging.getLogger(__name__)


class Anchor(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class DrawInstruction:
    text: str
    x: float
    y: float
    width: float
    style: TextStyle
    align: Align = Align.CENTER
    baseline: Baseline = Baseline.MIDDLE

    @property
    def left_edge(self) -> float:
        if self.align == Align.CENTER:
            return self.x - self.width / 2
        return self.x


class TextMeasurer(Protocol):
    def text_width(self, text: str, style: TextStyle) -> float: ...


def build_font(style: TextStyle) -> QFont:
    font = QFont(style.font_family)
    font.setStyleHint(QFont.StyleHint.SansSerif)
    font.setPixelSize(style.font_size_px)
    font.setWeight(QFont.Weight(style.font_weight))
    return font


class QtTextMeasurer:
    """Measures text with the same fonts the compositor paints with. Needs a QGuiApplication."""

    def __init__(self) -> None:
        self._metrics: dict[TextStyle, QFontMetricsF] = {}

    def metrics(self, style: TextStyle) -> QFontMetricsF:
        if style not in self._metrics:
            self._metrics[style] = QFontMetricsF(build_font(style))
        return self._metrics[style]

    def text_width(self, text: str, style: TextStyle) -> float:
        return self.metrics(style).horizontalAdvance(text)


def layout(
    text: str,
    style: TextStyle,
    anchor: Anchor,
    exclusion_zone: Optional[ExclusionZone] = None,
    *,
    image_width: Optional[float] = None,
    align: Align = Align.CENTER,
    measurer: Optional[TextMeasurer] = None,
) -> DrawInstruction:
    """
    Position `text` at `anchor`, shifting it right if it would start inside the exclusion zone.

    If the left edge of the text would fall left of
    `exclusion_zone.boundary_fraction * image_width`, the text is moved so that
    its left edge sits exactly on that boundary. Centered text stays centered,
    just around `boundary + width / 2`. Vertically the text is always centered
    on `anchor.y`.

    Args:
        text: Canonical text to draw.
        style: Font and colour of the slot.
        anchor: Pixel anchor (center point for CENTER, left edge for LEFT).
        exclusion_zone: Optional zone the text must stay clear of.
        image_width: Background width in pixels. Required with an exclusion zone.
        align: Horizontal alignment relative to the anchor.
        measurer: Text width provider. Defaults to Qt font metrics.
    """
    if measurer is None:
        measurer = QtTextMeasurer()
    width = measurer.text_width(text, style)

    x = anchor.x
    if exclusion_zone is not None:
        if image_width is None:
            raise ValueError("image_width is required when an exclusion zone is given.")
        boundary = exclusion_zone.boundary_px(image_width)
        left_edge = x - width / 2 if align == Align.CENTER else x
        if left_edge < boundary:
            x = boundary + width / 2 if align == Align.CENTER else boundary
            logger.debug(f"'{text}' ({width:.1f}px) shifted right to clear boundary at {boundary:.1f}px")

    return DrawInstruction(
        text=text,
        x=x,
        y=anchor.y,
        width=width,
        style=style,
        align=align,
        baseline=Baseline.MIDDLE,
    )


def layout_template(
    template: TemplateSpec,
    values: dict[str, str],
    image_width: int,
    image_height: int,
    measurer: Optional[TextMeasurer] = None,
) -> list[DrawInstruction]:
    """Lay out every text slot of `template` for a background of the given size."""
    if measurer is None:
        measurer = QtTextMeasurer()

    instructions = []
    for slot in template.slots:
        anchor = Anchor(*slot.resolve_anchor(image_width, image_height))
        instructions.append(layout(
            slot.render_text(values),
            slot.style,
            anchor,
            slot.exclusion_zone,
            image_width=image_width,
            align=slot.align,
            measurer=measurer,
        ))
    return instructions
