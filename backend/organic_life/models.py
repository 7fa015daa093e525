from organic_life import db
from flask_login import UserMixin
from datetime import datetime, timezone
import json

from organic_life.services.leaderboard.store import LeaderboardEntry


def _utcnow():
    return datetime.now(timezone.utc)


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    open_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.Text, nullable=True)
    email = db.Column(db.String(320), nullable=True)
    login_method = db.Column(db.String(64), nullable=True)
    role = db.Column(db.String(16), nullable=False, default='user')  # user, admin
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    last_signed_in = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    progress = db.relationship('GameProgress', back_populates='user', uselist=False)

    def to_dict(self):
        return {
            'id': self.id,
            'open_id': self.open_id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
        }


class GameProgress(db.Model):
    __tablename__ = 'game_progress'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)
    current_score = db.Column(db.Integer, nullable=False, default=0)
    current_level = db.Column(db.Integer, nullable=False, default=1)
    current_energy = db.Column(db.Integer, nullable=False, default=100)
    current_health = db.Column(db.Integer, nullable=False, default=100)
    current_cell_id = db.Column(db.String(32), nullable=False, default='prokaryotic')
    # JSON-encoded blobs
    unlocked_cells = db.Column(db.Text, nullable=False, default='["prokaryotic"]')
    achievements_unlocked = db.Column(db.Text, nullable=False, default='[]')
    molecules_created = db.Column(db.Text, nullable=False, default='{}')
    elements = db.Column(db.Text, nullable=False, default='{}')
    totals = db.Column(db.Text, nullable=False, default='{}')
    last_played_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    user = db.relationship('User', back_populates='progress')

    def apply_snapshot(self, snapshot, achievement_ids=()):
        self.current_score = snapshot['score']
        self.current_level = snapshot['level']
        self.current_energy = snapshot['energy']
        self.current_health = snapshot['health']
        self.current_cell_id = snapshot['current_cell_id']
        self.unlocked_cells = json.dumps(snapshot['unlocked_cell_ids'])
        self.achievements_unlocked = json.dumps(list(achievement_ids))
        self.molecules_created = json.dumps(snapshot['molecules_created'])
        self.elements = json.dumps(snapshot['elements'])
        self.totals = json.dumps({
            'monomers': snapshot['monomers'],
            'macromolecules': snapshot['macromolecules'],
            'total_monomers_created': snapshot['total_monomers_created'],
            'total_macromolecules_created': snapshot['total_macromolecules_created'],
        })
        self.last_played_at = _utcnow()

    def to_snapshot(self):
        try:
            totals = json.loads(self.totals or '{}')
        except Exception:
            totals = {}
        return {
            'score': self.current_score,
            'level': self.current_level,
            'energy': self.current_energy,
            'health': self.current_health,
            'current_cell_id': self.current_cell_id,
            'unlocked_cell_ids': json.loads(self.unlocked_cells or '[]'),
            'molecules_created': json.loads(self.molecules_created or '{}'),
            'elements': json.loads(self.elements or '{}'),
            'monomers': totals.get('monomers', []),
            'macromolecules': totals.get('macromolecules', []),
            'total_monomers_created': totals.get('total_monomers_created', 0),
            'total_macromolecules_created': totals.get('total_macromolecules_created', 0),
        }

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'snapshot': self.to_snapshot(),
            'achievements_unlocked': json.loads(self.achievements_unlocked or '[]'),
            'last_played_at': self.last_played_at.isoformat() if self.last_played_at else None,
        }


class LeaderboardRow(db.Model):
    __tablename__ = 'leaderboard_entry'
    id = db.Column(db.Integer, primary_key=True)
    rank = db.Column(db.Integer, nullable=False, index=True)
    player_name = db.Column(db.String(50), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    level = db.Column(db.Integer, nullable=False, default=1)
    date = db.Column(db.String(10), nullable=False)
    cell_type = db.Column(db.String(64), nullable=False)

    def to_entry(self):
        return LeaderboardEntry(
            rank=self.rank,
            player_name=self.player_name,
            score=self.score,
            level=self.level,
            date=self.date,
            cell_type=self.cell_type,
        )

    @classmethod
    def from_entry(cls, entry):
        return cls(
            rank=entry.rank,
            player_name=entry.player_name,
            score=entry.score,
            level=entry.level,
            date=entry.date,
            cell_type=entry.cell_type,
        )
