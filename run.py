#!/usr/bin/env python3
"""
Run script for the Message Board
"""
import uvicorn

from board.config.settings import settings
from board.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, reload=settings.debug)
