import os

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str):
    value = os.getenv(name, "").strip()
    return float(value) if value else None


def local_url(host: str, port: int) -> str:
    """URL this server can be reached on from the same machine."""
    if host in ("", "0.0.0.0", "::"):
        host = "127.0.0.1"
    return f"http://{host}:{port}"


class Config:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "8000"))
    SESSION_COOKIE = os.getenv("SESSION_COOKIE", "review_session")

    # Generative AI service (server side only)
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

    # Where the review page sends its requests, this server by default
    REVIEW_API_URL = os.getenv("REVIEW_API_URL") or local_url(HOST, PORT)
    REVIEW_TIMEOUT = _optional_float("REVIEW_TIMEOUT")


config = Config()
