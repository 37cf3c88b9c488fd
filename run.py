#!/usr/bin/env python3
"""
Simple run script for the Journey Engine.

Usage:
    python run.py
    
Or with custom settings:
    HOST=127.0.0.1 PORT=8080 python run.py
"""

import uvicorn

from journeyflow.config import settings


def main():
    """Run the FastAPI application."""
    print(f"""
╔═══════════════════════════════════════════════════════════════╗
║                      JourneyFlow 🧭                           ║
║                                                               ║
║  A resumable multi-step journey engine                        ║
╠═══════════════════════════════════════════════════════════════╣
║  Server:    http://{settings.HOST}:{settings.PORT}
║  API Docs:  http://{settings.HOST}:{settings.PORT}/docs
║  Graph:     http://{settings.HOST}:{settings.PORT}/journey/graph
╚═══════════════════════════════════════════════════════════════╝
    """)
    
    uvicorn.run(
        "journeyflow.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
