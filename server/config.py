"""
Server-specific configuration
"""

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class ServerConfig:
    # API Server Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = os.getenv("ALLOWED_ORIGINS", "*").split(",")
    ALLOW_CREDENTIALS: bool = True

    # Session Settings
    SESSION_TIMEOUT_MINUTES: int = int(os.getenv("SESSION_TIMEOUT_MINUTES", "60"))

    # Page Settings
    STORE_NAME: str = os.getenv("STORE_NAME", "Shameless Collective")


server_config = ServerConfig()
