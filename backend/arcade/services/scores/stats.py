import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from arcade.errors import StorageError
from arcade.models import GameScore
from arcade.services.accounts import parse_user_id

logger = logging.getLogger(__name__)

CLICKER = 'clicker'
MEMORY = 'memory'

# How "best" is picked per game type. Other game types have no best score
# and only count toward totals and recent history.
BEST_SCORE_AGGREGATES = {
    CLICKER: func.max,  # points, higher is better
    MEMORY: func.min,   # moves, lower is better
}

DEFAULT_RECENT_LIMIT = 10


@dataclass(frozen=True)
class StatsSnapshot:
    total_games: int = 0
    # 0 both when nothing was played and when the best really is 0
    best_clicker_score: int = 0
    best_memory_moves: int = 0
    recent_games: Tuple[Dict[str, Any], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalGames': self.total_games,
            'bestClickerScore': self.best_clicker_score,
            'bestMemoryMoves': self.best_memory_moves,
            'recentGames': list(self.recent_games),
        }


class StatsAggregator:
    """Computes a user's StatsSnapshot straight from the score ledger.

    Nothing is cached; every call re-reads the ledger in its own session.
    """

    def __init__(self, engine, recent_limit: int = DEFAULT_RECENT_LIMIT):
        self.engine = engine
        self.recent_limit = recent_limit

    def get_stats(self, user_id) -> StatsSnapshot:
        uid = parse_user_id(user_id)
        if uid is None:
            return StatsSnapshot()

        try:
            with Session(self.engine) as session:
                total = session.scalar(
                    select(func.count(GameScore.id)).where(GameScore.user_id == uid)
                )
                best_clicker = self._best_score(session, uid, CLICKER)
                best_memory = self._best_score(session, uid, MEMORY)
                recent = session.scalars(
                    select(GameScore)
                    .where(GameScore.user_id == uid)
                    .order_by(GameScore.played_at.desc(), GameScore.id.desc())
                    .limit(self.recent_limit)
                ).all()
                recent_games = tuple(record.summary() for record in recent)
        except SQLAlchemyError as exc:
            logger.exception(f"[stats-failed] user={uid}")
            raise StorageError('Failed to load stats') from exc

        return StatsSnapshot(
            total_games=total or 0,
            best_clicker_score=best_clicker or 0,
            best_memory_moves=best_memory or 0,
            recent_games=recent_games,
        )

    @staticmethod
    def _best_score(session: Session, uid: int, game_type: str):
        aggregate = BEST_SCORE_AGGREGATES[game_type]
        return session.scalar(
            select(aggregate(GameScore.score)).where(
                GameScore.user_id == uid,
                GameScore.game_type == game_type,
            )
        )
