"""
Keyword table mapping classifier labels to object categories.

The table is an ordered sequence rather than a dict: a label is tested against
keywords in declaration order and the first hit wins, which also makes the
tie-break between equally confident labels reproducible.
"""

from typing import Iterable, Optional, Sequence, Tuple

from .model import Category

CATEGORY_KEYWORDS: Tuple[Tuple[str, Category], ...] = (
    # Clocks first so "clock radio" or "wall clock" never fall through to metal.
    ("clock", Category.CLOCK),
    ("watch", Category.CLOCK),
    ("hourglass", Category.CLOCK),
    ("sundial", Category.CLOCK),
    # Compounds that would otherwise hit a later, wrong keyword
    ("breastplate", Category.METAL),
    ("table lamp", Category.METAL),
    # Furniture
    ("chair", Category.FURNITURE),
    ("rocker", Category.FURNITURE),
    ("throne", Category.FURNITURE),
    ("table", Category.FURNITURE),
    ("desk", Category.FURNITURE),
    ("cupboard", Category.FURNITURE),
    ("cabinet", Category.FURNITURE),
    ("chest", Category.FURNITURE),
    ("wardrobe", Category.FURNITURE),
    ("dresser", Category.FURNITURE),
    ("bookcase", Category.FURNITURE),
    ("sofa", Category.FURNITURE),
    ("couch", Category.FURNITURE),
    ("bench", Category.FURNITURE),
    ("stool", Category.FURNITURE),
    ("cradle", Category.FURNITURE),
    ("bed", Category.FURNITURE),
    # Ceramic
    ("vase", Category.CERAMIC),
    ("teapot", Category.CERAMIC),
    ("pitcher", Category.CERAMIC),
    ("ewer", Category.CERAMIC),
    ("pot", Category.CERAMIC),
    ("plate", Category.CERAMIC),
    ("bowl", Category.CERAMIC),
    ("cup", Category.CERAMIC),
    ("porcelain", Category.CERAMIC),
    # Glass
    ("goblet", Category.GLASS),
    ("beer glass", Category.GLASS),
    ("wine bottle", Category.GLASS),
    ("decanter", Category.GLASS),
    ("glass", Category.GLASS),
    # Jewelry
    ("necklace", Category.JEWELRY),
    ("ring", Category.JEWELRY),
    ("brooch", Category.JEWELRY),
    ("bracelet", Category.JEWELRY),
    ("pendant", Category.JEWELRY),
    # Metal
    ("candle", Category.METAL),
    ("lamp", Category.METAL),
    ("lantern", Category.METAL),
    ("bell", Category.METAL),
    ("coin", Category.METAL),
    ("helmet", Category.METAL),
    ("armor", Category.METAL),
    ("sword", Category.METAL),
    ("kettle", Category.METAL),
    ("spoon", Category.METAL),
    ("ladle", Category.METAL),
    # Books
    ("book", Category.BOOK),
    ("binder", Category.BOOK),
    # Artwork
    ("painting", Category.ARTWORK),
    ("frame", Category.ARTWORK),
    ("tapestry", Category.ARTWORK),
    ("sculpture", Category.ARTWORK),
    ("statue", Category.ARTWORK),
    ("mask", Category.ARTWORK),
)

# Everyday labels that merely contain a keyword ("jackpot" holds "pot").
# They are blanked out before matching so they never select a category.
IGNORED_TERMS: Tuple[str, ...] = (
    "jackpot",
    "spotlight",
    "potpie",
    "mashed potato",
    "license plate",
    "dumbbell",
    "barbell",
    "bell pepper",
    "sunglass",
    "desktop computer",
    "gasmask",
    "oxygen mask",
    "ski mask",
)


def primary_term(label: str) -> str:
    """Return the first term of a compound label such as "dining table, board"."""
    return label.split(",", 1)[0].strip()


def match_keyword(label: str,
                  table: Sequence[Tuple[str, Category]] = CATEGORY_KEYWORDS) -> Optional[Tuple[int, Category]]:
    """
    Find the first keyword contained in a label.

    Returns:
        (table index, category) of the first match, or None
    """
    text = primary_term(label).lower()
    for term in IGNORED_TERMS:
        text = text.replace(term, " ")
    for index, (keyword, category) in enumerate(table):
        if keyword in text:
            return index, category
    return None


def resolve_category(ranked_labels: Iterable[str],
                     table: Sequence[Tuple[str, Category]] = CATEGORY_KEYWORDS) -> Category:
    """Category of the first label, in the given order, that matches a keyword."""
    for label in ranked_labels:
        match = match_keyword(label, table)
        if match is not None:
            return match[1]
    return Category.UNKNOWN


def ranking_key(label: str, confidence: float,
                table: Sequence[Tuple[str, Category]] = CATEGORY_KEYWORDS) -> Tuple[float, int, str]:
    """Sort key: confidence descending, then keyword table order, then label text."""
    match = match_keyword(label, table)
    keyword_rank = match[0] if match is not None else len(table)
    return (-confidence, keyword_rank, label)
