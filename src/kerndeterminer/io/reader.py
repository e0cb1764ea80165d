"""Font-source loader.

Opens binary fonts with fontTools, UFO sources with ufoLib2 and designspace
documents with fontTools.designspaceLib plus ufoLib2, and exposes each as a
domain Font. Glyphs are converted on demand by the masters' readers.
"""

import threading
from pathlib import Path
from typing import Any

import structlog
import ufoLib2
from fontTools.designspaceLib import DesignSpaceDocument
from fontTools.ttLib import TTFont

from kerndeterminer.domain import Font, Glyph, Master
from kerndeterminer.exceptions import FontFormatError, FontLoadError
from kerndeterminer.io.converter import draw_glyph

logger = structlog.get_logger(__name__)

BINARY_SUFFIXES = frozenset({".ttf", ".otf", ".woff", ".woff2"})
UFO_SUFFIXES = frozenset({".ufo", ".ufoz"})
DESIGNSPACE_SUFFIXES = frozenset({".designspace"})

DEFAULT_MASTER_NAME = "Regular"


def load_font(source: str | Path) -> Font:
    """Load a font source into a domain Font.

    Args:
        source: Path to a TTF/OTF/WOFF/WOFF2 binary, a UFO, or a designspace

    Returns:
        Font with one master per style (static binary), named instance
        (variable binary), layer (UFO) or source (designspace)

    Raises:
        FontFormatError: If the suffix is not a supported format
        FontLoadError: If the source is missing or cannot be parsed
    """
    path = Path(source)
    suffix = path.suffix.lower()

    if suffix in BINARY_SUFFIXES:
        loader = _load_binary
    elif suffix in UFO_SUFFIXES:
        loader = _load_ufo
    elif suffix in DESIGNSPACE_SUFFIXES:
        loader = _load_designspace
    else:
        raise FontFormatError(str(path), f"'{suffix or path.name}' is not a known font source")

    if not path.exists():
        raise FontLoadError(str(path), "file not found")

    try:
        font = loader(path)
    except FontLoadError:
        raise
    except Exception as e:
        raise FontLoadError(str(path), str(e) or type(e).__name__) from e

    if len(font) == 0:
        raise FontLoadError(str(path), "no masters found")

    logger.info(
        "Font loaded",
        path=str(path),
        masters=font.master_names,
        upm=font.units_per_em,
    )
    return font


def _binary_reader(glyph_set: Any):
    def read(name: str) -> Glyph:
        source_glyph = glyph_set[name]
        return draw_glyph(name, source_glyph, glyph_set, getattr(source_glyph, "width", 0))

    return read


def _style_name(tt: TTFont) -> str:
    if "name" not in tt:
        return DEFAULT_MASTER_NAME
    name_table = tt["name"]
    return name_table.getDebugName(17) or name_table.getDebugName(2) or DEFAULT_MASTER_NAME


def _load_binary(path: Path) -> Font:
    tt = TTFont(str(path))
    glyph_names = tt.getGlyphOrder()
    lock = threading.Lock()

    default_name = _style_name(tt)
    masters = [Master(default_name, glyph_names, _binary_reader(tt.getGlyphSet()), lock)]

    if "fvar" in tt:
        seen = {default_name}
        for instance in tt["fvar"].instances:
            name = tt["name"].getDebugName(instance.subfamilyNameID)
            if not name or name in seen:
                continue
            seen.add(name)
            glyph_set = tt.getGlyphSet(location=dict(instance.coordinates))
            masters.append(Master(name, glyph_names, _binary_reader(glyph_set), lock))

    return Font(masters, path=path, units_per_em=tt["head"].unitsPerEm)


def _layer_reader(layer: Any):
    def read(name: str) -> Glyph:
        source_glyph = layer[name]
        anchors = {
            anchor.name: (anchor.x, anchor.y)
            for anchor in source_glyph.anchors
            if anchor.name
        }
        return draw_glyph(name, source_glyph, layer, source_glyph.width, anchors)

    return read


def _units_per_em(ufo: ufoLib2.Font) -> int:
    return int(ufo.info.unitsPerEm or 1000)


def _load_ufo(path: Path) -> Font:
    ufo = ufoLib2.Font.open(path)
    lock = threading.Lock()

    default_layer = ufo.layers.defaultLayer
    default_name = ufo.info.styleName or DEFAULT_MASTER_NAME
    masters = [Master(default_name, default_layer.keys(), _layer_reader(default_layer), lock)]
    aliases = {default_layer.name: default_name}

    for layer in ufo.layers:
        if layer is default_layer or layer.name == default_name:
            continue
        masters.append(Master(layer.name, layer.keys(), _layer_reader(layer), lock))

    return Font(masters, path=path, units_per_em=_units_per_em(ufo), aliases=aliases)


def _load_designspace(path: Path) -> Font:
    document = DesignSpaceDocument.fromfile(path)
    if not document.sources:
        raise FontLoadError(str(path), "designspace has no sources")

    lock = threading.Lock()
    opened: dict[str, ufoLib2.Font] = {}
    masters: list[Master] = []
    aliases: dict[str, str] = {}
    used: set[str] = set()

    for source in document.sources:
        if source.path is None:
            raise FontLoadError(str(path), f"source '{source.name}' has no file")
        if source.path not in opened:
            opened[source.path] = ufoLib2.Font.open(source.path)
        ufo = opened[source.path]

        layer = ufo.layers[source.layerName] if source.layerName else ufo.layers.defaultLayer
        name = source.styleName or source.name or Path(source.path).stem
        if name in used:
            name = source.name or f"{name} ({layer.name})"
        used.add(name)

        if source.name and source.name != name:
            aliases[source.name] = name
        masters.append(Master(name, layer.keys(), _layer_reader(layer), lock))

    units_per_em = _units_per_em(next(iter(opened.values())))
    return Font(masters, path=path, units_per_em=units_per_em, aliases=aliases)
