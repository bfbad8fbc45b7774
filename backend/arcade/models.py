from arcade import db


def _isoformat(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)
    scores = db.relationship('GameScore', back_populates='user', lazy='dynamic')

    def to_dict(self, include_last_login=False):
        data = {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'created_at': _isoformat(self.created_at),
        }
        if include_last_login:
            data['last_login'] = _isoformat(self.last_login)
        return data


class GameScore(db.Model):
    """One recorded game result. Rows are only ever inserted."""
    __tablename__ = 'game_scores'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    game_type = db.Column(db.String(32), nullable=False)
    # clicker: points (higher is better); memory: moves (lower is better)
    score = db.Column(db.BigInteger, nullable=False)
    played_at = db.Column(db.DateTime(timezone=True), nullable=False)
    user = db.relationship('User', back_populates='scores')

    __table_args__ = (
        db.Index('ix_game_scores_user_played_at', 'user_id', 'played_at'),
        db.Index('ix_game_scores_user_game_type', 'user_id', 'game_type'),
    )

    def summary(self):
        return {
            'game_type': self.game_type,
            'score': self.score,
            'played_at': _isoformat(self.played_at),
        }

    def to_dict(self):
        data = self.summary()
        data['id'] = self.id
        data['user_id'] = self.user_id
        return data
