"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env before any constant below is read
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Environment (RELEASENOTES_ENV with NODE_ENV fallback for existing deploy scripts)
ENV = os.getenv("RELEASENOTES_ENV", os.getenv("NODE_ENV", "development"))

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "5173"))

# CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Google Cloud / BigQuery
GOOGLE_CLOUD_PROJECT = os.getenv("GOOGLE_CLOUD_PROJECT")
BIGQUERY_DATASET = os.getenv("BIGQUERY_DATASET", "google_cloud_release_notes")
BIGQUERY_TABLE = os.getenv("BIGQUERY_TABLE", "release_notes")
BIGQUERY_LOCATION = os.getenv("BIGQUERY_LOCATION", "US")

# Gemini (generativelanguage REST API)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL")
GEMINI_API_ENDPOINT = os.getenv(
    "GEMINI_API_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta"
)
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60"))

# Firestore visitor counter
FIRESTORE_COLLECTION = os.getenv("FIRESTORE_COLLECTION", "visitor_counters")
FIRESTORE_DOCUMENT_ID = os.getenv("FIRESTORE_DOCUMENT_ID", "global_counter")

# Rate limiting (15 minute window, 100 requests per IP)
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))
RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))

# Cache Settings (parsed for parity with deploy configs; no cache reads it)
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL", "3600"))

# Built frontend
STATIC_DIR = Path(os.getenv("STATIC_DIR", str(PROJECT_ROOT / "public")))


def is_production() -> bool:
    """Check if running in production"""
    return ENV == "production"


def is_development() -> bool:
    """Check if running in development"""
    return ENV == "development"
