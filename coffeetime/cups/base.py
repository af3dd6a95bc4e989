from __future__ import annotations

from abc import ABC, abstractmethod
from math import sin

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen


COFFEE = QColor("#6f4e37")
ICED_COFFEE = QColor("#a47551")
STEAM = QColor(255, 255, 255, 150)


class BaseCup(ABC):
    identifier: str

    @abstractmethod
    def render(self, painter: QPainter, rect: QRectF, level: float, is_hot: bool, time_s: float) -> None:
        """Render the cup with liquid at ``level`` percent."""

    def fill_clipped(self, painter: QPainter, body: QPainterPath, level: float, color: QColor) -> None:
        """Fill the lower ``level`` percent of ``body`` with ``color``."""
        bounds = body.boundingRect()
        fraction = max(0.0, min(100.0, level)) / 100.0
        top = bounds.bottom() - bounds.height() * fraction
        painter.save()
        painter.setClipPath(body)
        painter.fillRect(QRectF(bounds.left(), top, bounds.width(), bounds.bottom() - top), color)
        painter.restore()

    def draw_steam(self, painter: QPainter, center_x: float, top: float, time_s: float) -> None:
        painter.save()
        painter.setPen(QPen(STEAM, 4, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        for i, dx in enumerate((-18, 0, 18)):
            path = QPainterPath(QPointF(center_x + dx, top - 6))
            for step in range(1, 5):
                wobble = sin(time_s * 2 + i + step) * 5
                path.lineTo(QPointF(center_x + dx + wobble, top - 6 - step * 10))
            painter.drawPath(path)
        painter.restore()

    def outline(self, painter: QPainter, body: QPainterPath, color: QColor = QColor("#3e2c23")) -> None:
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(color, 4))
        painter.drawPath(body)

    def body_brush(self, painter: QPainter, body: QPainterPath, color: QColor) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(color))
        painter.drawPath(body)
