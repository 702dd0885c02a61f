"""
Alphabet - Ordered, cyclic catalog of symbols a flap can show
"""

from typing import Dict, Iterable, Iterator, Optional, Tuple

SPACE = " "
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
COLOUR_TILES = "🟥🟧🟨🟩🟦🟪🟫⬛⬜"

DEFAULT_SYMBOLS = SPACE + UPPERCASE + LOWERCASE + DIGITS + COLOUR_TILES


class Alphabet:
    """Cyclic sequence of unique symbols with constant-time position lookup"""

    def __init__(self, symbols: Iterable[str]):
        self._symbols: Tuple[str, ...] = tuple(symbols)
        self._positions: Dict[str, int] = {}

        for index, symbol in enumerate(self._symbols):
            if symbol in self._positions:
                raise ValueError(f"Duplicate symbol in alphabet: {symbol!r}")
            self._positions[symbol] = index

    def index_of(self, symbol: str) -> Optional[int]:
        """Position of symbol, or None when the alphabet does not contain it"""
        return self._positions.get(symbol)

    def successor(self, symbol: str) -> Optional[str]:
        """Symbol following the given one, wrapping after the last position"""
        index = self.index_of(symbol)
        if index is None:
            return None
        return self._symbols[(index + 1) % len(self._symbols)]

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self._symbols

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._positions

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __getitem__(self, item):
        return self._symbols[item]

    def __repr__(self) -> str:
        return f"Alphabet({''.join(self._symbols)!r})"


DEFAULT_ALPHABET = Alphabet(DEFAULT_SYMBOLS)
