"""Theme word sources feeding the regular word list of a session."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Sequence

from ..core.constants import Difficulty
from ..core.exceptions import ThemeWordError, UnknownDifficultyError
from ..core.rules import get_difficulty_config
from ..utils.logger import get_logger
from .normalization import clean_word

if TYPE_CHECKING:
    from ..io.gemini_client import GeminiWordClient


LOGGER = get_logger(__name__)


@dataclass
class ThemeWord:
    """A candidate regular word and where it came from."""

    word: str
    source: str = "unknown"


@dataclass
class ThemeOutput:
    """Wraps theme word generation results with optional metadata."""

    words: List[ThemeWord] = field(default_factory=list)
    title: Optional[str] = None

    def texts(self) -> List[str]:
        return [entry.word for entry in self.words]


class ThemeWordGenerator(Protocol):
    """Protocol implemented by all theme word providers."""

    def generate(
        self, theme: str, limit: int = 40,
        difficulty: str = "medium", language: str = "French",
    ) -> ThemeOutput:
        ...


class GeminiThemeWordGenerator:
    """LLM-powered generator that asks Gemini for a JSON array of words."""

    PROMPT = (
        "List {limit} distinct {language} words for a word search puzzle on the "
        "theme '{theme}'. Each entry is a single word without spaces or hyphens, "
        "{min_len} to {max_len} letters long. Answer with a JSON array of strings."
    )

    def __init__(self, client: Optional["GeminiWordClient"] = None) -> None:
        self._client = client

    @property
    def client(self) -> "GeminiWordClient":
        if self._client is None:
            from ..io.gemini_client import GeminiWordClient

            self._client = GeminiWordClient()
        return self._client

    def generate(
        self, theme: str, limit: int = 40,
        difficulty: str = "medium", language: str = "French",
    ) -> ThemeOutput:
        try:
            min_len, max_len = get_difficulty_config(difficulty).word_length_range
        except UnknownDifficultyError:
            min_len, max_len = get_difficulty_config(Difficulty.MEDIUM).word_length_range
        prompt = self.PROMPT.format(
            language=language, limit=limit, theme=theme, min_len=min_len, max_len=max_len
        )
        entries: List[ThemeWord] = []
        for raw in self.client.request_words(prompt, limit):
            cleaned = clean_word(raw)
            if cleaned:
                entries.append(ThemeWord(word=cleaned, source="gemini"))
        return ThemeOutput(words=entries, title=theme or None)


class UserWordListGenerator:
    """Returns a user-supplied list of words as ThemeWord objects."""

    def __init__(self, raw_words: Sequence[str]) -> None:
        self._theme_words: List[ThemeWord] = []
        for item in raw_words:
            cleaned = clean_word(item.strip())
            if cleaned:
                self._theme_words.append(ThemeWord(cleaned, "user"))

    def generate(
        self, theme: str, limit: int = 40,
        difficulty: str = "medium", language: str = "French",
    ) -> ThemeOutput:
        return ThemeOutput(words=list(self._theme_words))


DEFAULT_THEME_BUCKETS: Dict[str, List[str]] = {
    "animals": [
        "CHAT", "CHIEN", "LAPIN", "CHEVAL", "TIGRE", "LION", "ZEBRE", "GIRAFE",
        "SINGE", "OURS", "LOUP", "RENARD", "HIBOU", "AIGLE", "CANARD", "MOUTON",
        "VACHE", "COCHON", "SOURIS", "DAUPHIN", "BALEINE", "PANTHERE", "ELEPHANT",
        "CROCODILE", "KANGOUROU", "HERISSON", "ECUREUIL",
    ],
    "food": [
        "PAIN", "FROMAGE", "POMME", "POIRE", "BANANE", "FRAISE", "CERISE", "TARTE",
        "GATEAU", "CREPE", "SOUPE", "SALADE", "PATES", "BEURRE", "YAOURT", "CAROTTE",
        "TOMATE", "OIGNON", "POULET", "CHOCOLAT", "CROISSANT", "BAGUETTE", "CONFITURE",
    ],
    "sports": [
        "TENNIS", "RUGBY", "BOXE", "JUDO", "GOLF", "VOILE", "SKI", "SURF", "KARATE",
        "ESCRIME", "AVIRON", "CYCLISME", "NATATION", "HANDBALL", "FOOTBALL",
        "BASKET", "ATHLETISME", "MARATHON", "PLONGEON", "ESCALADE",
    ],
    "colors": [
        "ROUGE", "BLEU", "VERT", "JAUNE", "ROSE", "NOIR", "BLANC", "GRIS", "ORANGE",
        "VIOLET", "MARRON", "TURQUOISE", "BEIGE", "CORAIL", "INDIGO", "POURPRE",
        "CARMIN", "AZUR", "OCRE", "EMERAUDE",
    ],
    "nature": [
        "ARBRE", "FLEUR", "FORET", "RIVIERE", "MONTAGNE", "PRAIRIE", "NUAGE",
        "SOLEIL", "ETOILE", "OCEAN", "PLAGE", "VALLEE", "CASCADE", "ROCHER",
        "FEUILLE", "RACINE", "BRANCHE", "JARDIN", "COLLINE", "LAGUNE",
    ],
    "travel": [
        "VALISE", "AVION", "TRAIN", "BATEAU", "HOTEL", "PASSEPORT", "BILLET",
        "CARTE", "BOUSSOLE", "VOYAGE", "PLAGE", "CROISIERE", "ESCALE", "GUIDE",
        "MUSEE", "VISITE", "AEROPORT", "FRONTIERE", "ITINERAIRE",
    ],
    "music": [
        "PIANO", "GUITARE", "VIOLON", "FLUTE", "TAMBOUR", "TROMPETTE", "HARPE",
        "CHANSON", "MELODIE", "RYTHME", "CONCERT", "OPERA", "CHORALE", "ORCHESTRE",
        "SYMPHONIE", "ACCORD", "REFRAIN", "PARTITION",
    ],
    "history": [
        "EMPIRE", "REINE", "GUERRE", "BATAILLE", "REVOLUTION", "DYNASTIE",
        "PHARAON", "EMPEREUR", "GLADIATEUR", "CHEVALIER", "VIKING", "CHATEAU",
        "PYRAMIDE", "COLISEE", "TEMPLE", "SIECLE", "EPOQUE", "MONUMENT",
    ],
    "technology": [
        "ROBOT", "ECRAN", "CLAVIER", "SOURIS", "CABLE", "RESEAU", "LOGICIEL",
        "INTERNET", "TABLETTE", "SERVEUR", "PROCESSEUR", "ALGORITHME", "MEMOIRE",
        "BATTERIE", "CAPTEUR", "SATELLITE", "ORDINATEUR", "TELEPHONE", "CAMERA",
    ],
    "professions": [
        "MEDECIN", "PILOTE", "AVOCAT", "CHEF", "JUGE", "MAGICIEN", "FACTEUR",
        "POMPIER", "INFIRMIER", "BOULANGER", "PROFESSEUR", "ARCHITECTE", "PLOMBIER",
        "JARDINIER", "MENUISIER", "JOURNALISTE", "ELECTRICIEN", "VETERINAIRE",
    ],
    "weather": [
        "PLUIE", "NEIGE", "VENT", "ORAGE", "GRELE", "BRUME", "NUAGE", "SOLEIL",
        "TONNERRE", "ECLAIR", "TEMPETE", "OURAGAN", "TORNADE", "CANICULE",
        "BROUILLARD", "ARCENCIEL", "TEMPERATURE", "PRECIPITATION", "GIBOULEE",
    ],
    "science": [
        "ATOME", "CELLULE", "ENERGIE", "GRAVITE", "MOLECULE", "PROTON", "NEUTRON",
        "ELECTRON", "CHIMIE", "PHYSIQUE", "BIOLOGIE", "THEORIE", "HYPOTHESE",
        "MICROSCOPE", "LABORATOIRE", "EXPERIENCE", "EVOLUTION", "GENETIQUE",
    ],
    "space": [
        "LUNE", "ETOILE", "PLANETE", "COMETE", "GALAXIE", "FUSEE", "ORBITE",
        "NEBULEUSE", "ASTEROIDE", "TELESCOPE", "SATELLITE", "ASTRONAUTE", "COSMOS",
        "UNIVERS", "ECLIPSE", "METEORITE", "CONSTELLATION", "MARTIEN",
    ],
    "geography": [
        "ILE", "CAP", "DESERT", "VOLCAN", "FLEUVE", "PLATEAU", "GLACIER", "CONTINENT",
        "PENINSULE", "ARCHIPEL", "EQUATEUR", "LATITUDE", "LONGITUDE", "MERIDIEN",
        "FRONTIERE", "CAPITALE", "HEMISPHERE", "TOUNDRA", "SAVANE",
    ],
    "art": [
        "TOILE", "PINCEAU", "PEINTURE", "SCULPTURE", "DESSIN", "FRESQUE", "PORTRAIT",
        "PAYSAGE", "MOSAIQUE", "GRAVURE", "AQUARELLE", "CHEVALET", "ESQUISSE",
        "GALERIE", "EXPOSITION", "MUSEE", "PALETTE", "CERAMIQUE",
    ],
    "literature": [
        "ROMAN", "POEME", "CONTE", "FABLE", "AUTEUR", "CHAPITRE", "NOUVELLE",
        "TRAGEDIE", "COMEDIE", "PERSONNAGE", "NARRATEUR", "BIOGRAPHIE", "ROMANCIER",
        "DRAMATURGE", "MANUSCRIT", "BIBLIOTHEQUE", "POESIE", "ALEXANDRIN", "SONNET",
        "EPOPEE", "DIALOGUE", "METAPHORE",
    ],
    "philosophy": [
        "ETHIQUE", "MORALE", "LOGIQUE", "SAGESSE", "VERITE", "LIBERTE", "JUSTICE",
        "RAISON", "CONSCIENCE", "EXISTENCE", "METAPHYSIQUE", "DIALECTIQUE",
        "SOPHISTE", "STOICIEN", "ARGUMENT", "PENSEUR", "SYLLOGISME", "ESTHETIQUE",
        "DOCTRINE", "PHILOSOPHE",
    ],
    "medicine": [
        "SANTE", "VACCIN", "DOCTEUR", "HOPITAL", "CLINIQUE", "CHIRURGIE",
        "INFIRMIER", "DIAGNOSTIC", "PRESCRIPTION", "ANTIBIOTIQUE", "PHARMACIE",
        "ORDONNANCE", "STETHOSCOPE", "THERAPIE", "SYMPTOME", "GUERISON",
        "ANATOMIE", "CARDIOLOGUE", "RADIOLOGIE", "PEDIATRE",
    ],
    "architecture": [
        "DOME", "ARCHE", "PILIER", "FACADE", "COLONNE", "CATHEDRALE", "CHATEAU",
        "BASILIQUE", "FONDATION", "CHARPENTE", "ESCALIER", "BALUSTRADE", "VERRIERE",
        "GRATTECIEL", "ARCHITECTE", "MONUMENT", "COUPOLE", "CLOCHER", "PASSERELLE",
        "AQUEDUC",
    ],
}

# Draws from every bundled bucket.
MIXED_THEME = "mixed"


class BuiltinThemeWordGenerator:
    """Produces theme words from the bundled buckets."""

    def __init__(self, theme_buckets: Dict[str, List[str]] | None = None, seed: int | None = None) -> None:
        buckets = theme_buckets or DEFAULT_THEME_BUCKETS
        self.theme_buckets: Dict[str, List[str]] = {
            key.lower(): [clean_word(w) for w in words if clean_word(w)]
            for key, words in buckets.items()
        }
        self.rng = random.Random(seed)

    def themes(self) -> List[str]:
        return sorted(self.theme_buckets)

    def generate(
        self, theme: str, limit: int = 40,
        difficulty: str = "medium", language: str = "French",
    ) -> ThemeOutput:
        key = (theme or "").strip().lower()
        words = self.theme_buckets.get(key)
        if words is None and key == MIXED_THEME:
            words = sorted({word for bucket in self.theme_buckets.values() for word in bucket})
        if words is None:
            raise ThemeWordError(
                f"Theme '{theme}' has no bundled word list (known: {self.themes()})"
            )
        shuffled = list(words)
        self.rng.shuffle(shuffled)
        results = [ThemeWord(word=word, source="builtin") for word in shuffled[:limit]]
        LOGGER.info("Builtin generator produced %s words for '%s'", len(results), key)
        return ThemeOutput(words=results)


def merge_theme_generators(
    primary: ThemeWordGenerator | None,
    fallbacks: Sequence[ThemeWordGenerator],
    theme: str,
    target: int,
    difficulty: str = "medium",
    language: str = "French",
) -> ThemeOutput:
    """Attempt primary generator, cascaded fallbacks, and deduplicate results."""

    collected: List[ThemeWord] = []
    seen: set[str] = set()
    title: Optional[str] = None

    def extend(output: ThemeOutput) -> None:
        nonlocal title
        if title is None and output.title:
            title = output.title
        for entry in output.words:
            key = clean_word(entry.word)
            if not key or key in seen:
                continue
            collected.append(ThemeWord(word=key, source=entry.source))
            seen.add(key)
            if len(collected) >= target:
                break

    sources = ([primary] if primary else []) + list(fallbacks)
    for generator in sources:
        if len(collected) >= target:
            break
        try:
            extend(generator.generate(theme, limit=target, difficulty=difficulty, language=language))
        except Exception as exc:
            LOGGER.warning("Theme generator %s failed: %s", type(generator).__name__, exc)

    return ThemeOutput(words=collected[:target], title=title)
