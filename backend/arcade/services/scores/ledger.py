import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from arcade.errors import StorageError, ValidationError
from arcade.models import GameScore, User
from arcade.services.accounts import parse_user_id

logger = logging.getLogger(__name__)

MAX_GAME_TYPE_LENGTH = 32

# Range of the BIGINT score column
MIN_SCORE = -(2 ** 63)
MAX_SCORE = 2 ** 63 - 1


def _require(user_id, game_type, score) -> None:
    # 0 never names a user, so it counts as missing like an empty id
    if user_id is None or user_id == 0 or (isinstance(user_id, str) and not user_id.strip()):
        raise ValidationError('All fields are required')
    if not isinstance(game_type, str) or not game_type.strip():
        raise ValidationError('All fields are required')
    # 0 is a real score; only an absent one is rejected
    if score is None:
        raise ValidationError('All fields are required')
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError('Score must be an integer')
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError('Score is out of range')
    if len(game_type) > MAX_GAME_TYPE_LENGTH:
        raise ValidationError(f'Game type must be at most {MAX_GAME_TYPE_LENGTH} characters')


class ScoreLedger:
    """Append-only store of game results.

    Records are inserted with a server-assigned ``played_at`` and never
    updated or deleted. Submitting the same result twice stores it twice.
    """

    def __init__(self, engine):
        self.engine = engine

    def record_score(self, user_id, game_type: str, score: int) -> None:
        _require(user_id, game_type, score)

        uid = parse_user_id(user_id)
        if uid is None:
            logger.info(f"[score-rejected] user={user_id!r} does not name a user")
            raise StorageError('Unknown user')

        try:
            with Session(self.engine) as session:
                with session.begin():
                    # Stamped inside the transaction, right before the insert
                    # assigns the id, so played_at tracks insertion order
                    record = GameScore(
                        user_id=uid,
                        game_type=game_type,
                        score=score,
                        played_at=datetime.now(timezone.utc),
                    )
                    session.add(record)
                    session.flush()
        except SQLAlchemyError as exc:
            # session.begin() has already rolled the insert back
            logger.exception(f"[score-failed] user={uid} game_type={game_type}")
            raise StorageError('Failed to save game score') from exc

        logger.info(f"[score-saved] user={uid} game_type={game_type} score={score}")

    def list_scores(self) -> List[Dict[str, Any]]:
        """Every record with its owner's username, newest first."""
        try:
            with Session(self.engine) as session:
                rows = session.execute(
                    select(GameScore, User.username)
                    .join(User, GameScore.user_id == User.id)
                    .order_by(GameScore.played_at.desc(), GameScore.id.desc())
                ).all()
                scores = []
                for record, username in rows:
                    data = record.to_dict()
                    data['username'] = username
                    scores.append(data)
                return scores
        except SQLAlchemyError as exc:
            logger.exception("[list-scores-failed]")
            raise StorageError('Failed to list game scores') from exc
