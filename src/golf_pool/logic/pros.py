"""
Professional golfers available for drafting, and their score lookup.

The draft list is static and no live score provider is wired yet, so score
lookups always answer with an unknown score.
"""

from typing import List, Optional

from golf_pool.models.output import ProScoreOutput
from golf_pool.models.player import Pro

PROS = (
    Pro(id='Rory McIlroy', name='Rory McIlroy'),
    Pro(id='Scottie Scheffler', name='Scottie Scheffler'),
    Pro(id='Jon Rahm', name='Jon Rahm'),
    Pro(id='Xander Schauffele', name='Xander Schauffele'),
)

PROVIDER_NOTE = 'Placeholder. Wire to PGA score provider later.'


def list_pros() -> List[Pro]:
    return list(PROS)


def lookup_pro_score(pro_id: Optional[str]) -> ProScoreOutput:
    # TODO: query a live leaderboard provider once one is chosen; until then the score is unknown
    return ProScoreOutput(pro_id=pro_id, pro_to_par=None, note=PROVIDER_NOTE)
