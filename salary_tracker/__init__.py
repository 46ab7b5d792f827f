import os

__version__ = "0.1.0"


SRC_PATH = os.path.dirname(os.path.abspath(__file__))
USER_DIR = os.path.join(os.path.expanduser('~'), '.salary-tracker')
DB_PATH = os.path.join(USER_DIR, 'data.db')
DB_URL = os.environ.get('SALARY_TRACKER_DB_URL', f'sqlite:///{DB_PATH}')
LOG_LEVEL = os.environ.get('SALARY_TRACKER_LOG_LEVEL', 'INFO')
