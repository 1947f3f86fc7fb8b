from os import getenv

class Settings:
    # Telegram : si token ou chat_id manquent, les notifications sont ignorées
    TELEGRAM_BOT_TOKEN = getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_CHAT_ID = getenv("TELEGRAM_CHAT_ID", "")
    TELEGRAM_API_BASE = getenv("TELEGRAM_API_BASE", "https://api.telegram.org")
    TELEGRAM_TIMEOUT = float(getenv("TELEGRAM_TIMEOUT", "10"))

    MAX_UPLOAD_BYTES = int(getenv("MAX_UPLOAD_BYTES", str(25 * 1024 * 1024)))  # 25 Mo, limite des valeurs KV
    CORS_MAX_AGE = int(getenv("CORS_MAX_AGE", "86400"))  # preflight en cache 24h
    POLL_INTERVAL_SECONDS = float(getenv("POLL_INTERVAL_SECONDS", "4"))

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
