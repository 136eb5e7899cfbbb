import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseModel):
    opentdb_url: str = os.getenv("OPENTDB_URL", "https://opentdb.com/api.php")
    question_amount: int = int(os.getenv("QUESTION_AMOUNT", "12"))
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "10.0"))
    hints_per_session: int = int(os.getenv("HINTS_PER_SESSION", "3"))
    history_dir: str = os.getenv("HISTORY_DIR", os.path.join("logs", "history"))
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG")

settings = Settings()
