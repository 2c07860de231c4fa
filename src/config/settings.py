"""
Configuration settings for the Posts Sync Backend
"""

import os
import logging

logger = logging.getLogger(__name__)

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD or QA
DATABASE_URL = os.getenv("DATABASE_URL")
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database pool sizing
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))

# Remote posts source
POSTS_SOURCE_URL = os.getenv("POSTS_SOURCE_URL", "https://jsonplaceholder.typicode.com/posts")
POSTS_SOURCE_TIMEOUT = float(os.getenv("POSTS_SOURCE_TIMEOUT", 30.0))

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if origin.strip()]

# DATABASE_URL is enforced by init_database so modules stay importable without it
if not DATABASE_URL:
    logger.warning("DATABASE_URL not set - database connection will fail on startup")
