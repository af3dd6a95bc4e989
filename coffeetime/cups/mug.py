from __future__ import annotations

from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen

from coffeetime.cups.base import COFFEE, BaseCup


class MugCup(BaseCup):
    identifier = "mug"

    def render(self, painter: QPainter, rect: QRectF, level: float, is_hot: bool, time_s: float) -> None:
        w = rect.width() * 0.5
        h = rect.height() * 0.55
        left = rect.center().x() - w / 2
        top = rect.center().y() - h / 2 + rect.height() * 0.08

        body = QPainterPath()
        body.addRoundedRect(QRectF(left, top, w, h), 14, 14)
        self.body_brush(painter, body, QColor("#fdf6ec"))
        self.fill_clipped(painter, body, level, COFFEE)
        self.outline(painter, body)

        painter.setPen(QPen(QColor("#3e2c23"), 6))
        painter.drawArc(QRectF(left + w - 12, top + h * 0.2, w * 0.35, h * 0.45), -90 * 16, 180 * 16)

        if is_hot and level > 0:
            self.draw_steam(painter, rect.center().x(), top, time_s)
