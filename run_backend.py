#!/usr/bin/env python
"""Script to run the task tracker API server."""
import sys
from pathlib import Path

# Make the tasktracker package importable when run from a checkout
script_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(script_dir))

import uvicorn

from tasktracker.config import HOST, PORT, RELOAD

if __name__ == "__main__":
    uvicorn.run(
        "tasktracker.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
    )
