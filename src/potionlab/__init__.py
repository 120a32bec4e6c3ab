"""
potionlab - Recipe discovery helper.

Record trials, watch the candidate space shrink, try what is left.
"""

from potionlab.domain import Domain, generate_combos, match_count
from potionlab.engine import ResearchEngine
from potionlab.models.trial import Combo
from potionlab.recommend import Selection

__version__ = "0.1.0"
__all__ = [
    "Combo",
    "Domain",
    "ResearchEngine",
    "Selection",
    "__version__",
    "generate_combos",
    "match_count",
]
