from dataclasses import fields

from coffeetime.ui.styles import DARK, LIGHT, build_qss


def test_light_and_dark_sheets_differ() -> None:
    light = build_qss(LIGHT)
    dark = build_qss(DARK)

    assert light != dark
    assert LIGHT.background in light
    assert DARK.background in dark
    assert DARK.background not in light


def test_every_palette_color_is_used() -> None:
    for palette in (LIGHT, DARK):
        qss = build_qss(palette)
        for field in fields(palette):
            assert getattr(palette, field.name) in qss, field.name
