"""
Main entry point for the engine bridge.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn engine_bridge.fastapi_app:app --host 0.0.0.0 --port 8080

Startup aborts with a non-zero exit status when the engine client cannot be
initialized; SIGINT/SIGTERM stop the listener and exit 0.
"""

from dotenv import load_dotenv

# Load environment variables before settings are imported
load_dotenv()

import uvicorn

from engine_bridge.config.settings import get_config

settings = get_config()

if __name__ == "__main__":
    print(f"Starting engine bridge on http://{settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "engine_bridge.fastapi_app:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )
