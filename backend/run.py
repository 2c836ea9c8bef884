#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Starts the API with auto-reload against whatever DATABASE_URL the
environment (or backend/.env) points at; the SQLite default needs no setup.
"""
import os
import sys
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from careersync.core.config import settings

if __name__ == "__main__":
    print(f"Starting CareerSync booking API ({settings.environment})")
    print(f"Database: {settings.database_url}")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run(
        "careersync.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level=settings.log_level.lower(),
    )
