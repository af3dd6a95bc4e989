from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QColor, QPainter, QPainterPath

from coffeetime.cups.base import COFFEE, BaseCup


class TakeawayCup(BaseCup):
    identifier = "takeaway"

    def render(self, painter: QPainter, rect: QRectF, level: float, is_hot: bool, time_s: float) -> None:
        w = rect.width() * 0.45
        h = rect.height() * 0.62
        cx = rect.center().x()
        top = rect.center().y() - h / 2 + rect.height() * 0.06

        body = QPainterPath(QPointF(cx - w / 2, top))
        body.lineTo(QPointF(cx + w / 2, top))
        body.lineTo(QPointF(cx + w * 0.36, top + h))
        body.lineTo(QPointF(cx - w * 0.36, top + h))
        body.closeSubpath()

        self.body_brush(painter, body, QColor("#f5f5f5"))
        self.fill_clipped(painter, body, level, COFFEE)

        sleeve = QPainterPath(QPointF(cx - w * 0.45, top + h * 0.3))
        sleeve.lineTo(QPointF(cx + w * 0.45, top + h * 0.3))
        sleeve.lineTo(QPointF(cx + w * 0.41, top + h * 0.62))
        sleeve.lineTo(QPointF(cx - w * 0.41, top + h * 0.62))
        sleeve.closeSubpath()
        self.body_brush(painter, sleeve, QColor(161, 136, 127, 200))
        self.outline(painter, body)

        lid = QPainterPath()
        lid.addRoundedRect(QRectF(cx - w * 0.55, top - 14, w * 1.1, 16), 6, 6)
        self.body_brush(painter, lid, QColor("#5d4037"))

        if is_hot and level > 0:
            self.draw_steam(painter, cx, top - 14, time_s)
