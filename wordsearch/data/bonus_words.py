"""Bonus-word dictionary checked against arbitrary player selections.

Bonus words are never placed by the generator. A selection is credited as a
bonus find only when the letters it covers happen to spell one of these
entries.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set

from ..core.models import BonusReward
from ..core.rules import get_bonus_reward
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)


DEFAULT_BONUS_WORDS: List[str] = [
    # English, three letters
    "THE", "CAT", "DOG", "BAT", "RAT", "HAT", "MAT", "SAT", "FAT",
    "BIG", "PIG", "DIG", "FIG", "WIG", "JIG",
    "HOT", "POT", "DOT", "LOT", "GOT", "NOT", "ROT", "COT",
    "SUN", "FUN", "RUN", "BUN", "GUN", "NUN",
    "CAR", "BAR", "JAR", "TAR", "FAR", "WAR",
    "RED", "BED", "LED", "FED", "WED",
    "SEE", "BEE", "FEE", "TEE",
    "OLD", "COLD", "GOLD", "HOLD", "FOLD", "SOLD", "TOLD", "BOLD",
    # French, three letters
    "ROI", "LIT", "VIE", "MER", "FEU", "AIR", "EAU", "SUR", "VIN",
    "SOL", "COU", "DOS", "NEZ", "BAS", "SAC", "SEC", "VOL", "VUE",
    "AMI", "AGE", "ART", "BLE", "CLE", "DUC", "ETE", "FIN", "GAZ",
    "MAL", "MUR", "NEF", "OIE", "PAR", "PRE", "QUI", "RUE",
    "SOU", "UNE", "VAL", "ZOO",
    # French, four letters and more
    "PAIN", "CHAT", "LOUP", "OURS", "ROSE", "VERT", "BLEU", "NOIR",
    "DANS", "AVEC", "POUR", "SANS", "TOUT", "ELLE", "VOUS",
    "FILLE", "FILS", "MERE", "PERE", "BEBE", "DAME", "MARI",
    "CAFE", "LAIT", "MIEL", "SOIF", "FAIM",
    "BOIS", "PONT", "TOUR", "PORT", "GARE", "PARC", "BANC",
    "FORT", "DOUX", "JOLI", "BEAU", "LAID", "HAUT", "LONG",
]


# Hand-picked bonus words shown as "hidden extras" for the early levels.
LEVEL_BONUS_WORDS: Dict[int, List[str]] = {
    1: ["VIE", "ROI", "COU"],
    2: ["THE", "SEL", "RIZ"],
    3: ["VIF", "JEU", "BUT"],
    4: ["OIE", "VER", "ANE"],
    5: ["ARC", "TRI", "VUE"],
    6: ["PAIN", "LAIT", "MIEL"],
    7: ["BOIS", "ROUX", "VENT"],
    8: ["GAIN", "PIED", "MAIN"],
    9: ["GRUE", "PAON", "LYNX"],
    10: ["ROSE", "BLEU", "GRIS"],
    11: ["PONT", "GARE", "TAXI", "QUAI"],
    12: ["SOIF", "FAIM", "BEUR", "CAFE"],
    13: ["SONO", "VOIX", "TUNE", "ECHO"],
    14: ["FAON", "BETE", "PARC", "CAGE"],
    15: ["PUCE", "BITS", "MEGA", "CODE"],
    16: ["PARI", "RING", "CLUB", "CAGE"],
    17: ["PAVE", "PARC", "MARE", "ALLEE"],
    18: ["JUGE", "CHEF", "AIDE", "VETO"],
    19: ["VISA", "ILES", "TOUR", "COTE"],
    20: ["LIVE", "SOLO", "RIFF", "NOTE"],
}


def level_bonus_words(level_id: int) -> List[str]:
    return list(LEVEL_BONUS_WORDS.get(level_id, []))


class BonusDictionary:
    """Set of normalized bonus words with reward lookup."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: Set[str] = set()
        for word in words:
            self.add(word)

    @classmethod
    def default(cls, extra: Iterable[str] = ()) -> "BonusDictionary":
        dictionary = cls(DEFAULT_BONUS_WORDS)
        for word in extra:
            dictionary.add(word)
        return dictionary

    @classmethod
    def from_file(cls, path: Path | str) -> "BonusDictionary":
        """Load one word per line. Blank lines and # comments are skipped."""

        source = Path(path)
        entries: List[str] = []
        for line in source.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            entries.append(line)
        dictionary = cls(entries)
        LOGGER.info("Loaded %s bonus words from %s", len(dictionary), source)
        return dictionary

    def add(self, word: str) -> None:
        cleaned = clean_word(word)
        if cleaned:
            self._words.add(cleaned)

    def contains(self, word: str) -> bool:
        return clean_word(word) in self._words

    def reward_for(self, word: str) -> Optional[BonusReward]:
        if not self.contains(word):
            return None
        return get_bonus_reward(len(clean_word(word)))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)
