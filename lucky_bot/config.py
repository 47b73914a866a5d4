from pathlib import Path
from dotenv import load_dotenv  # pip install python-dotenv
import os

# the env file name can be overridden, .env by default
env_file = os.getenv("ENV_FILE", ".env")
load_dotenv(Path(__file__).parent.parent / env_file)

DATA_DIR = Path(__file__).parent / "data"

bot_token = os.getenv("BOT_TOKEN")  # only needed to run the bot itself
database_url = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'lucky_bot.db'}")
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
pace_scale = float(os.getenv("PACE_SCALE", "1.0"))  # multiplier for reply delays
