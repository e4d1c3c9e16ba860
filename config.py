import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Sessions (in-memory, one form state per browser)
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "vietphoto_session")
SESSION_MAX = int(os.getenv("SESSION_MAX", "500"))
SESSION_IDLE_SECONDS = float(os.getenv("SESSION_IDLE_SECONDS", "3600"))

# The Gemini key (GEMINI_API_KEY) is read by utils/gemini_client.py at call time.
