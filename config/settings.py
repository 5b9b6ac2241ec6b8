"""Central Configuration for the Nuskha-e-Sehat backend."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Base Directory (Root of the project)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load Environment Variables
load_dotenv(BASE_DIR / ".env")

# LLM Settings
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.0-flash")

# Server action limits
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "25"))
MAX_MEDIA_BYTES = int(os.getenv("MAX_MEDIA_BYTES", str(6 * 1024 * 1024)))

# Language used when the client does not send one
DEFAULT_USER_LANG = os.getenv("DEFAULT_USER_LANG", "ur")

# HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Shown on the emergency screen
EMERGENCY_HELPLINES = [
    {"name": "Rescue 1122", "number": "1122"},
    {"name": "Edhi Ambulance", "number": "115"},
    {"name": "Sehat Sahulat Program", "number": "0800-09009"},
]
