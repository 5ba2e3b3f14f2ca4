from pydantic import BaseModel
import os
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "Petstore")
    env: str = os.getenv("APP_ENV", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")
    # límites de slowapi ("N/periodo")
    upload_rate_limit: str = os.getenv("UPLOAD_RATE_LIMIT", "10/minute")
    signup_rate_limit: str = os.getenv("SIGNUP_RATE_LIMIT", "5/minute")
    max_photo_bytes: int = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
