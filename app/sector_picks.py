# sector_picks.py
# Static picks per sector, injected into whatever presents them
# The momentum core never reads this table

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence


@dataclass(frozen=True)
class SectorPick:
    symbol: str
    name: str
    acceleration: float   # 2nd order ROC snapshot, not recomputed
    price: float
    signal: str           # display label, e.g. "STRONG BUY"


DEFAULT_SECTOR_PICKS: Dict[str, List[SectorPick]] = {
    "Tech": [
        SectorPick("GOOGL", "Alphabet Inc.", 6.2, 178.20, "BUY"),
        SectorPick("META", "Meta Platforms", 8.4, 485.10, "STRONG BUY"),
        SectorPick("MSFT", "Microsoft", 2.1, 415.00, "BUY"),
        SectorPick("CPNG", "Coupang", 5.5, 21.50, "BUY"),
        SectorPick("MELI", "MercadoLibre", 7.1, 1650.00, "STRONG BUY"),
    ],
    "Healthcare": [
        SectorPick("NTRA", "Natera Inc.", 12.5, 115.40, "STRONG BUY"),
        SectorPick("INSM", "Insmed Inc.", 9.3, 72.10, "STRONG BUY"),
        SectorPick("TEVA", "Teva Pharm", 4.2, 18.20, "BUY"),
        SectorPick("VRNA", "Verona Pharma", 3.8, 34.50, "BUY"),
        SectorPick("LLY", "Eli Lilly", 1.5, 780.00, "HOLD"),
    ],
    "Industrials": [
        SectorPick("WAB", "Westinghouse Air", 5.1, 168.00, "BUY"),
        SectorPick("ETN", "Eaton Corp", 2.3, 320.00, "BUY"),
        SectorPick("PH", "Parker-Hannifin", 1.8, 540.00, "HOLD"),
        SectorPick("GE", "GE Aerospace", 4.5, 160.00, "BUY"),
        SectorPick("CAT", "Caterpillar", -1.2, 350.00, "HOLD"),
    ],
}


class SectorPicksTable:
    """
    Read-only lookup over sector -> picks.

    Category order is insertion order of the mapping it was built from.
    """

    def __init__(self, picks: Mapping[str, Sequence[SectorPick]] = None):
        source = DEFAULT_SECTOR_PICKS if picks is None else picks
        if not source:
            raise ValueError("Sector picks table cannot be empty")
        self._picks = {category: tuple(items) for category, items in source.items()}

    def categories(self) -> List[str]:
        return list(self._picks)

    def picks(self, category: str) -> tuple:
        """Picks for category; empty for an unknown category."""
        return self._picks.get(category, ())

    def next_category(self, current: str) -> str:
        """
        Cyclic sector switch.

        Unknown current category starts over at the first one.
        """
        cats = self.categories()
        if current not in self._picks:
            return cats[0]
        return cats[(cats.index(current) + 1) % len(cats)]
