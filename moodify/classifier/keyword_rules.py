"""
Keyword Rule Tables

Hand-authored phrase tables used for weighted mood scoring.

Two tables exist because the main search bar and the voice search tab were
tuned separately:

- WEIGHTED_RULES: the main search table, phrases weighted 5-10
- VOICE_RULES: the voice search table, every phrase weighted 1

DEFAULT_RULES is the superset of both. Phrases that only the voice table
knows are added at VOICE_ONLY_WEIGHT. The strict preset keeps scoring with
WEIGHTED_RULES alone; the lenient preset and the module-level classify()
score with DEFAULT_RULES.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

from ..models.mood_models import KeywordRule, MoodCategory

VOICE_ONLY_WEIGHT = 4

_WEIGHTED_TABLE: Dict[MoodCategory, List[Tuple[str, int]]] = {
    MoodCategory.HAPPY: [
        ("happy", 10), ("cheerful", 8), ("joyful", 8), ("upbeat", 9),
        ("feel good", 9), ("positive", 7), ("dance", 6), ("party", 8),
        ("fun", 7), ("celebration", 6), ("joy", 8), ("good vibes", 8),
        ("optimistic", 6), ("bright", 5), ("sunny", 6), ("lively", 7),
    ],
    MoodCategory.SAD: [
        ("sad", 10), ("melancholy", 9), ("emotional", 7), ("depressing", 8),
        ("heartbreak", 9), ("cry", 8), ("tears", 8), ("lonely", 8),
        ("blue", 6), ("down", 6), ("grief", 8), ("sorrow", 8),
        ("ballad", 7), ("slow songs", 8), ("breakup", 9), ("missing", 7),
    ],
    MoodCategory.ENERGETIC: [
        ("energetic", 10), ("pump up", 9), ("workout", 9), ("exercise", 8),
        ("gym", 8), ("running", 7), ("high energy", 9), ("motivated", 7),
        ("powerful", 7), ("intense", 8), ("adrenaline", 8), ("cardio", 7),
        ("rock", 6), ("metal", 7), ("electronic", 6), ("edm", 8),
    ],
    MoodCategory.CHILL: [
        ("chill", 10), ("relax", 9), ("calm", 8), ("peaceful", 8),
        ("zen", 7), ("meditation", 8), ("lo-fi", 9), ("ambient", 8),
        ("soft", 6), ("quiet", 6), ("soothing", 8), ("laid back", 8),
        ("study music", 9), ("background", 6), ("cafe", 7), ("mellow", 7),
    ],
    MoodCategory.ANGRY: [
        ("angry", 10), ("rage", 9), ("aggressive", 9), ("mad", 8),
        ("furious", 8), ("metal", 8), ("hardcore", 8), ("punk", 7),
        ("scream", 7), ("heavy", 7), ("brutal", 8), ("fierce", 7),
        ("hard rock", 8), ("alternative", 6), ("grunge", 7),
    ],
    MoodCategory.ROMANTIC: [
        ("romantic", 10), ("love", 9), ("romance", 9), ("valentine", 8),
        ("date night", 8), ("intimate", 8), ("r&b", 7), ("soul", 7),
        ("smooth", 7), ("sensual", 8), ("passion", 7), ("love songs", 9),
        ("couples", 7), ("wedding", 7), ("anniversary", 7),
    ],
}

_VOICE_TABLE: Dict[MoodCategory, List[str]] = {
    MoodCategory.HAPPY: [
        "happy", "cheerful", "joyful", "upbeat", "feel good", "positive",
        "energetic music", "dance", "party", "fun", "celebration", "joy",
        "good vibes", "optimistic", "bright", "sunny", "lively", "peppy",
    ],
    MoodCategory.SAD: [
        "sad", "melancholy", "emotional", "depressing", "heartbreak",
        "cry", "tears", "lonely", "blue", "down", "grief", "sorrow",
        "ballad", "slow songs", "breakup", "lost love", "missing", "somber",
    ],
    MoodCategory.ENERGETIC: [
        "energetic", "pump up", "workout", "exercise", "gym", "running",
        "high energy", "motivated", "powerful", "intense", "adrenaline",
        "rock", "metal", "electronic", "edm", "bass", "beats", "cardio",
    ],
    MoodCategory.CHILL: [
        "chill", "relax", "calm", "peaceful", "zen", "meditation",
        "lo-fi", "ambient", "soft", "quiet", "soothing", "laid back",
        "study music", "background", "cafe", "jazz", "acoustic", "mellow",
    ],
    MoodCategory.ANGRY: [
        "angry", "rage", "aggressive", "mad", "furious", "metal",
        "hardcore", "punk", "scream", "heavy", "brutal", "fierce",
        "rock", "hard rock", "alternative", "grunge", "intense",
    ],
    MoodCategory.ROMANTIC: [
        "romantic", "love", "romance", "valentine", "date night",
        "intimate", "r&b", "soul", "smooth", "sensual", "passion",
        "love songs", "couples", "wedding", "anniversary", "sexy",
    ],
}


def build_rules(table: Dict[MoodCategory, Sequence[Tuple[str, int]]]) -> Tuple[KeywordRule, ...]:
    """
    Flatten a {mood: [(phrase, weight), ...]} table into rules.

    Rules come out grouped by mood in declaration order, which keeps any
    logging of matches stable between runs.
    """
    rules: List[KeywordRule] = []
    for mood in MoodCategory.ordered():
        for phrase, weight in table.get(mood, ()):
            rules.append(KeywordRule(mood, phrase, weight))
    return tuple(rules)


def merge_rules(
    primary: Iterable[KeywordRule],
    secondary: Iterable[KeywordRule],
    supplement_weight: int = VOICE_ONLY_WEIGHT
) -> Tuple[KeywordRule, ...]:
    """
    Union two rule tables.

    Every primary rule is kept as is. A secondary (mood, phrase) pair the
    primary table lacks is added with ``supplement_weight``.

    Args:
        primary: Table whose weights win
        secondary: Table contributing extra phrases
        supplement_weight: Weight given to phrases only the secondary table has

    Returns:
        Merged rules, grouped by mood in declaration order
    """
    primary = tuple(primary)
    known = {(rule.category, rule.phrase) for rule in primary}

    merged: Dict[MoodCategory, List[KeywordRule]] = {mood: [] for mood in MoodCategory.ordered()}
    for rule in primary:
        merged[rule.category].append(rule)
    for rule in secondary:
        key = (rule.category, rule.phrase)
        if key in known:
            continue
        known.add(key)
        merged[rule.category].append(KeywordRule(rule.category, rule.phrase, supplement_weight))

    return tuple(rule for mood in MoodCategory.ordered() for rule in merged[mood])


WEIGHTED_RULES: Tuple[KeywordRule, ...] = build_rules(_WEIGHTED_TABLE)

VOICE_RULES: Tuple[KeywordRule, ...] = build_rules(
    {mood: [(phrase, 1) for phrase in phrases] for mood, phrases in _VOICE_TABLE.items()}
)

DEFAULT_RULES: Tuple[KeywordRule, ...] = merge_rules(WEIGHTED_RULES, VOICE_RULES)
