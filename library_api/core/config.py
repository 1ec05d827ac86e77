import os

DATABASE_URL = os.getenv("LIBRARY_DB", "sqlite:///./library.db")
LOG_LEVEL = os.getenv("LIBRARY_LOG", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "LIBRARY_CORS_ORIGINS",
        "http://localhost:5173,https://library-management-client-sage.vercel.app",
    ).split(",")
    if origin.strip()
]

HOST = os.getenv("LIBRARY_HOST", "0.0.0.0")
PORT = int(os.getenv("LIBRARY_PORT", "8000"))
