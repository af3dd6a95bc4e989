from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen

from coffeetime.cups.base import ICED_COFFEE, BaseCup


class GlassCup(BaseCup):
    """Tall tumbler with ice cubes; never steams."""
    identifier = "glass"

    def render(self, painter: QPainter, rect: QRectF, level: float, is_hot: bool, time_s: float) -> None:
        w = rect.width() * 0.4
        h = rect.height() * 0.7
        cx = rect.center().x()
        top = rect.center().y() - h / 2

        body = QPainterPath(QPointF(cx - w / 2, top))
        body.lineTo(QPointF(cx + w / 2, top))
        body.lineTo(QPointF(cx + w * 0.4, top + h))
        body.lineTo(QPointF(cx - w * 0.4, top + h))
        body.closeSubpath()

        self.body_brush(painter, body, QColor(225, 245, 254, 120))
        self.fill_clipped(painter, body, level, ICED_COFFEE)

        cube_top = top + h * (1 - max(0.0, min(100.0, level)) / 100.0)
        painter.setPen(QPen(QColor(255, 255, 255, 200), 2))
        painter.setBrush(QBrush(QColor(255, 255, 255, 90)))
        for i, dx in enumerate((-0.2, 0.05)):
            painter.drawRoundedRect(QRectF(cx + w * dx, cube_top + 8 + i * 22, w * 0.22, w * 0.22), 4, 4)

        self.outline(painter, body, QColor("#90a4ae"))
        painter.setPen(QPen(QColor("#e53935"), 5, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        painter.drawLine(QPointF(cx + w * 0.1, top + h * 0.6), QPointF(cx + w * 0.35, top - h * 0.15))
