import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///organic_life.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Synthesis rewards (score points)
    MONOMER_SCORE_REWARD = int(os.environ.get('MONOMER_SCORE_REWARD', '10'))
    MACROMOLECULE_SCORE_REWARD = int(os.environ.get('MACROMOLECULE_SCORE_REWARD', '50'))
    # Leaderboard: 'memory' (volatile, default) or 'sql'
    LEADERBOARD_BACKEND = os.environ.get('LEADERBOARD_BACKEND', 'memory')
    LEADERBOARD_CAPACITY = int(os.environ.get('LEADERBOARD_CAPACITY', '10'))
    LEADERBOARD_SEED = os.environ.get('LEADERBOARD_SEED', '1') not in ('0', 'false', 'False')
    # Idle game sessions are disposed after this many seconds
    SESSION_IDLE_TIMEOUT_SEC = int(os.environ.get('SESSION_IDLE_TIMEOUT_SEC', '3600'))
    # OAuth collaborator
    OAUTH_SERVER_URL = os.environ.get('OAUTH_SERVER_URL', 'http://localhost:4000')
    APP_ID = os.environ.get('APP_ID', 'organic-life')
    OAUTH_CLIENT_SECRET = os.environ.get('OAUTH_CLIENT_SECRET')
    APP_DOMAIN = os.environ.get('APP_DOMAIN', 'http://localhost:3000')
    SESSION_COOKIE_NAME = os.environ.get('SESSION_COOKIE_NAME', 'organic_life_session')
