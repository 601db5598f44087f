"""
Per-ladder configuration.

Every ladder runs the same engine; what differs between them (K-factor,
starting rating, rating floor, tier table, how the roster is ordered and
which rating the scoring strategy updates) is captured here.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ladder.config import Config
from ladder.constants import RatingConstants
from ladder.operations.tiers import D3_TIER_TABLE, ELO_TIER_TABLE, TEAM_TIER_TABLE, TierTable
from ladder.utils.ladder_exceptions import UnknownLadderError

ORDER_BY_POSITION = "position"
ORDER_BY_RATING = "rating"
ORDER_BY_WIN_RATE = "win_rate"


@dataclass(frozen=True)
class LadderConfig:
    """Rules for one ladder."""
    name: str
    k_factor: int = RatingConstants.DEFAULT_K_FACTOR
    starting_rating: int = 200
    rating_floor: Optional[int] = 0
    tier_table: TierTable = ELO_TIER_TABLE
    ordering: str = ORDER_BY_POSITION
    scoring_type: str = "1v1"
    uses_tier_value: bool = False

    @property
    def is_challenge_ladder(self) -> bool:
        """Challenge ladders move players by beating someone ranked above them."""
        return self.ordering == ORDER_BY_POSITION


D1 = LadderConfig(name="D1")

# D2 is the only ladder with the participation rank floor
D2 = LadderConfig(name="D2", tier_table=ELO_TIER_TABLE.with_rank_floor())

D3 = LadderConfig(
    name="D3",
    starting_rating=1000,
    rating_floor=1000,
    tier_table=D3_TIER_TABLE,
)

DUOS = LadderConfig(
    name="DUOS",
    k_factor=RatingConstants.TIER_VALUE_K_FACTOR,
    starting_rating=RatingConstants.TIER_VALUE_START,
    rating_floor=RatingConstants.TIER_VALUE_FLOOR,
    tier_table=TEAM_TIER_TABLE,
    ordering=ORDER_BY_WIN_RATE,
    scoring_type="TierValue",
    uses_tier_value=True,
)

FFA = LadderConfig(
    name="FFA",
    starting_rating=RatingConstants.FFA_STARTING_RATING,
    rating_floor=RatingConstants.FFA_RATING_FLOOR,
    ordering=ORDER_BY_RATING,
    scoring_type="FFA",
)

LADDERS: Dict[str, LadderConfig] = {ladder.name: ladder for ladder in (D1, D2, D3, DUOS, FFA)}


def get_ladder_config(name: Optional[str] = None) -> LadderConfig:
    """
    Look up a ladder preset by name (case-insensitive); defaults to Config.DEFAULT_LADDER.

    Raises:
        UnknownLadderError: If no ladder has that name
    """
    name = name or Config.DEFAULT_LADDER
    try:
        return LADDERS[name.upper()]
    except KeyError:
        raise UnknownLadderError(name) from None
