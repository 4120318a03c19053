"""Initialize database (create tables). Run: python backend/init_db.py"""
from pricecheck.config import Settings
from pricecheck.database import init_db


if __name__ == '__main__':
    print(f'Initializing DB at {Settings.DATABASE_URL}...')
    init_db()
    print('DB initialized.')
