"""Shared pytest fixtures for the kerndeterminer test suite.

Fonts are generated on the fly with fontTools and ufoLib2 so the suite has
no binary fixtures.

Fixtures:
    make_glyph: Factory for rectangle glyphs
    make_outline: Factory for flattened rectangle outlines
    rect_font_path: Static TrueType font with rectangles, a composite,
        a round glyph and an empty glyph
    designspace_path: Two-master designspace backed by UFOs
"""

from collections.abc import Callable
from pathlib import Path

import pytest
import ufoLib2
from fontTools.designspaceLib import DesignSpaceDocument
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from kerndeterminer.core.sampler import flatten_glyph
from kerndeterminer.domain import Contour, FlattenedOutline, Glyph, Point


def _rect_contour(x0: float, y0: float, x1: float, y1: float) -> Contour:
    return Contour(points=[Point(x0, y0), Point(x0, y1), Point(x1, y1), Point(x1, y0)])


@pytest.fixture
def make_glyph() -> Callable[..., Glyph]:
    """Factory: glyph made of one rectangle per box."""

    def factory(
        name: str,
        *boxes: tuple[float, float, float, float],
        advance_width: float = 0.0,
        anchors: dict[str, tuple[float, float]] | None = None,
    ) -> Glyph:
        return Glyph(
            name=name,
            contours=[_rect_contour(*box) for box in boxes],
            advance_width=advance_width,
            anchors=anchors or {},
        )

    return factory


@pytest.fixture
def make_outline(make_glyph) -> Callable[..., FlattenedOutline]:
    """Factory: flattened outline made of one rectangle per box."""

    def factory(name: str, *boxes, **kwargs) -> FlattenedOutline:
        return flatten_glyph(make_glyph(name, *boxes, **kwargs))

    return factory


def _draw_rect(pen, x0, y0, x1, y1) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


def _build_rect_font(path: Path) -> None:
    glyph_order = [".notdef", "space", "rect", "rectlsb", "tee", "round", "pair"]
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)

    glyf: dict[str, object] = {}
    hmtx: dict[str, tuple[int, int]] = {}

    pen = TTGlyphPen(None)
    _draw_rect(pen, 50, 0, 450, 700)
    glyf[".notdef"] = pen.glyph()
    hmtx[".notdef"] = (500, 50)

    glyf["space"] = TTGlyphPen(None).glyph()
    hmtx["space"] = (250, 0)

    # 100 x 200 rectangle, no side bearings
    pen = TTGlyphPen(None)
    _draw_rect(pen, 0, 0, 100, 200)
    glyf["rect"] = pen.glyph()
    hmtx["rect"] = (100, 0)

    # Same rectangle with 20 units of side bearing on each side
    pen = TTGlyphPen(None)
    _draw_rect(pen, 20, 0, 120, 200)
    glyf["rectlsb"] = pen.glyph()
    hmtx["rectlsb"] = (140, 20)

    # T: a bar from 0 to 300 on top of a stem from 100 to 200
    pen = TTGlyphPen(None)
    _draw_rect(pen, 100, 0, 200, 600)
    _draw_rect(pen, 0, 600, 300, 700)
    glyf["tee"] = pen.glyph()
    hmtx["tee"] = (300, 0)

    # Quadratic circle of radius 100 centred on (100, 100)
    pen = TTGlyphPen(None)
    pen.moveTo((0, 100))
    pen.qCurveTo((0, 200), (100, 200))
    pen.qCurveTo((200, 200), (200, 100))
    pen.qCurveTo((200, 0), (100, 0))
    pen.qCurveTo((0, 0), (0, 100))
    pen.closePath()
    glyf["round"] = pen.glyph()
    hmtx["round"] = (200, 0)

    # Composite: rect shifted right by 50
    pen = TTGlyphPen({"rect": glyf["rect"]})
    pen.addComponent("rect", (1, 0, 0, 1, 50, 0))
    glyf["pair"] = pen.glyph()
    hmtx["pair"] = (150, 50)

    fb.setupGlyf(glyf)
    fb.setupHorizontalMetrics(hmtx)
    fb.setupCharacterMap({0x20: "space", 0x54: "tee", 0x6F: "round"})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupNameTable(
        {
            "familyName": "Kern Test",
            "styleName": "Regular",
            "uniqueFontIdentifier": "KernTest-Regular",
            "fullName": "Kern Test Regular",
            "psName": "KernTest-Regular",
            "version": "Version 1.000",
        }
    )
    fb.setupPost()
    fb.save(str(path))


@pytest.fixture(scope="session")
def rect_font_path(tmp_path_factory) -> Path:
    """Static TrueType test font."""
    path = tmp_path_factory.mktemp("fonts") / "KernTest-Regular.ttf"
    _build_rect_font(path)
    return path


def _build_ufo(path: Path, style_name: str, stem_width: int) -> None:
    ufo = ufoLib2.Font()
    ufo.info.familyName = "Kern Test"
    ufo.info.styleName = style_name
    ufo.info.unitsPerEm = 1000

    glyph = ufo.newGlyph("stem")
    glyph.width = stem_width
    _draw_rect(glyph.getPen(), 0, 0, stem_width, 500)

    glyph = ufo.newGlyph("beh")
    glyph.width = 300
    _draw_rect(glyph.getPen(), 0, 100, 300, 200)
    glyph.appendAnchor({"name": "exit", "x": 0, "y": 100})

    glyph = ufo.newGlyph("space")
    glyph.width = 250

    ufo.save(path)


@pytest.fixture(scope="session")
def designspace_path(tmp_path_factory) -> Path:
    """Designspace with a Light (stem 100) and a Bold (stem 200) master."""
    directory = tmp_path_factory.mktemp("designspace")
    _build_ufo(directory / "KernTest-Light.ufo", "Light", 100)
    _build_ufo(directory / "KernTest-Bold.ufo", "Bold", 200)

    document = DesignSpaceDocument()
    document.addAxisDescriptor(name="Weight", tag="wght", minimum=300, default=300, maximum=700)
    document.addSourceDescriptor(
        name="master.light",
        styleName="Light",
        filename="KernTest-Light.ufo",
        path=str(directory / "KernTest-Light.ufo"),
        location={"Weight": 300},
    )
    document.addSourceDescriptor(
        name="master.bold",
        styleName="Bold",
        filename="KernTest-Bold.ufo",
        path=str(directory / "KernTest-Bold.ufo"),
        location={"Weight": 700},
    )

    path = directory / "KernTest.designspace"
    document.write(str(path))
    return path
