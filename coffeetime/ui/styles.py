from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtWidgets import QApplication


@dataclass(frozen=True)
class Palette:
    background: str
    surface: str
    hover: str
    track: str
    text: str
    muted: str
    accent: str
    accent_pressed: str
    on_accent: str
    status: str


LIGHT = Palette(
    background="#f3e9dc",
    surface="#fffaf3",
    hover="#efe0cf",
    track="#e4d3c1",
    text="#2b1d14",
    muted="#8a7464",
    accent="#8d5b3e",
    accent_pressed="#6a4029",
    on_accent="#fffaf3",
    status="#6a4029",
)

DARK = Palette(
    background="#1e1611",
    surface="#2e231b",
    hover="#3b2d23",
    track="#46362a",
    text="#f3e9dc",
    muted="#b39b87",
    accent="#c68b5e",
    accent_pressed="#a86f45",
    on_accent="#1e1611",
    status="#c68b5e",
)


def build_qss(palette: Palette) -> str:
    p = palette
    return f"""
QWidget {{
    background: {p.background};
    color: {p.text};
    font-size: 13px;
}}

QLabel {{
    background: transparent;
}}

QLabel#Heading {{
    font-size: 26px;
    font-weight: 700;
}}

QLabel#TimerLabel {{
    font-size: 72px;
    font-weight: 700;
    color: {p.accent};
}}

QLabel#MutedText {{
    color: {p.muted};
    font-size: 12px;
}}

QPushButton {{
    border: none;
    background: {p.surface};
    border-radius: 14px;
    padding: 6px 14px;
}}

QPushButton:hover {{
    background: {p.hover};
}}

QPushButton:disabled {{
    background: {p.track};
    color: {p.text};
    font-weight: 700;
}}

QPushButton#PrimaryButton {{
    background: {p.accent};
    color: {p.on_accent};
    border-radius: 22px;
    padding: 10px 32px;
    font-size: 15px;
    font-weight: 700;
}}

QPushButton#PrimaryButton:pressed {{
    background: {p.accent_pressed};
}}

QSpinBox, QComboBox, QListWidget {{
    background: {p.surface};
    border: none;
    border-radius: 12px;
    padding: 6px 10px;
}}

QProgressBar {{
    border: 0;
    border-radius: 4px;
    background: {p.track};
    max-height: 8px;
}}

QProgressBar::chunk {{
    border-radius: 4px;
    background: {p.accent};
}}

QStatusBar {{
    color: {p.status};
    font-weight: 600;
}}
"""


def apply_theme(app: QApplication, dark: bool = False) -> None:
    app.setStyleSheet(build_qss(DARK if dark else LIGHT))
