"""Font and master containers.

A Font is the read-only object model handed to the kern determiner by the
font-source loader. Glyphs are read from the underlying source on demand,
so opening a large font does not convert every outline up front.
"""

import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path

from kerndeterminer.domain.glyph import Glyph
from kerndeterminer.exceptions import GlyphNotFoundError, MasterNotFoundError

GlyphReader = Callable[[str], Glyph]


class Master:
    """A named design variant holding glyphs keyed by name.

    Args:
        name: Master name (e.g., "Regular", "Light Ultra")
        glyph_names: Names of the glyphs available in this master
        reader: Callable producing the decomposed Glyph for a name
        lock: Lock serializing access to the underlying source; masters read
            from the same file share one lock
    """

    def __init__(
        self,
        name: str,
        glyph_names: Iterable[str],
        reader: GlyphReader,
        lock: "threading.Lock | None" = None,
    ) -> None:
        self._name = name
        self._glyph_names = frozenset(glyph_names)
        self._reader = reader
        self._lock = lock if lock is not None else threading.Lock()

    @classmethod
    def from_glyphs(cls, name: str, glyphs: Iterable[Glyph]) -> "Master":
        """Build a master from already-constructed glyphs."""
        by_name = {glyph.name: glyph for glyph in glyphs}
        return cls(name, by_name, by_name.__getitem__)

    @property
    def name(self) -> str:
        return self._name

    @property
    def glyph_names(self) -> frozenset[str]:
        return self._glyph_names

    def __contains__(self, glyph_name: object) -> bool:
        return glyph_name in self._glyph_names

    def __len__(self) -> int:
        return len(self._glyph_names)

    def glyph(self, glyph_name: str) -> Glyph:
        """Read a glyph from the source.

        Raises:
            GlyphNotFoundError: If the master has no glyph with that name
        """
        if glyph_name not in self._glyph_names:
            raise GlyphNotFoundError(glyph_name, self._name)
        with self._lock:
            return self._reader(glyph_name)

    def __repr__(self) -> str:
        return f"Master({self._name!r}, glyphs={len(self._glyph_names)})"


class Font:
    """An immutable, already-parsed font holding one or more masters.

    Args:
        masters: Masters in source order
        path: Source the font was loaded from, if any
        units_per_em: Font units per em
        aliases: Alternative names resolving to a master (e.g. a designspace
            source's style name)
    """

    def __init__(
        self,
        masters: Iterable[Master],
        path: Path | None = None,
        units_per_em: int = 1000,
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._masters: dict[str, Master] = {}
        for master in masters:
            self._masters.setdefault(master.name, master)
        self._aliases = {
            alias: target
            for alias, target in (aliases or {}).items()
            if alias not in self._masters and target in self._masters
        }
        self.path = path
        self.units_per_em = units_per_em

    @property
    def master_names(self) -> list[str]:
        return list(self._masters)

    @property
    def default_master(self) -> Master:
        return next(iter(self._masters.values()))

    def __iter__(self) -> Iterator[Master]:
        return iter(self._masters.values())

    def __len__(self) -> int:
        return len(self._masters)

    def __contains__(self, master_name: object) -> bool:
        return master_name in self._masters or master_name in self._aliases

    def master(self, master_name: str) -> Master:
        """Look up a master by name or alias.

        Raises:
            MasterNotFoundError: If no master matches
        """
        master = self._masters.get(master_name)
        if master is None and master_name in self._aliases:
            master = self._masters[self._aliases[master_name]]
        if master is None:
            raise MasterNotFoundError(master_name, self.master_names)
        return master

    def __repr__(self) -> str:
        return f"Font({str(self.path) if self.path else '<memory>'!r}, masters={self.master_names})"
