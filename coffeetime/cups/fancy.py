from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen

from coffeetime.cups.base import COFFEE, BaseCup


class FancyCup(BaseCup):
    """Teacup on a saucer with a gold rim."""
    identifier = "fancy"

    def render(self, painter: QPainter, rect: QRectF, level: float, is_hot: bool, time_s: float) -> None:
        w = rect.width() * 0.55
        h = rect.height() * 0.38
        cx = rect.center().x()
        top = rect.center().y() - h / 2

        saucer = QPainterPath()
        saucer.addEllipse(QRectF(cx - w * 0.7, top + h - 8, w * 1.4, 26))
        self.body_brush(painter, saucer, QColor("#fce4ec"))
        self.outline(painter, saucer, QColor("#ad1457"))

        body = QPainterPath(QPointF(cx - w / 2, top))
        body.lineTo(QPointF(cx + w / 2, top))
        body.cubicTo(QPointF(cx + w / 2, top + h * 0.8), QPointF(cx + w * 0.25, top + h), QPointF(cx, top + h))
        body.cubicTo(QPointF(cx - w * 0.25, top + h), QPointF(cx - w / 2, top + h * 0.8), QPointF(cx - w / 2, top))
        body.closeSubpath()

        self.body_brush(painter, body, QColor("#fff8fb"))
        self.fill_clipped(painter, body, level, COFFEE)
        self.outline(painter, body, QColor("#ad1457"))

        painter.setPen(QPen(QColor("#d4af37"), 3))
        painter.drawLine(QPointF(cx - w / 2, top), QPointF(cx + w / 2, top))
        painter.setPen(QPen(QColor("#ad1457"), 5))
        painter.drawArc(QRectF(cx + w * 0.38, top + h * 0.1, w * 0.3, h * 0.45), -90 * 16, 180 * 16)

        if is_hot and level > 0:
            self.draw_steam(painter, cx, top, time_s)
