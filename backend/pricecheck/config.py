"""Central configuration, read from the environment (and a local .env file)."""
import os

from dotenv import load_dotenv

load_dotenv()

STORE_NAME_POLICIES = ('refresh', 'keep')


class Settings:
    # --- Storage ---
    # Single connection string. Default to a sqlite file in the working dir for dev.
    DATABASE_URL: str = os.getenv('DATABASE_URL', 'sqlite:///./pricecheck.db')

    # --- Price comparison ---
    PROXIMITY_RADIUS_METERS: float = float(os.getenv('PROXIMITY_RADIUS_METERS', '1000'))
    PRICE_WINDOW_DAYS: int = int(os.getenv('PRICE_WINDOW_DAYS', '30'))  # 0 = no window

    # --- Identity ---
    # refresh: re-submitting a known address renames the store; keep: first name sticks
    STORE_NAME_POLICY: str = os.getenv('STORE_NAME_POLICY', 'refresh').lower()

    # --- Logging ---
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO').upper()
