"""Entry point for serving the Prylics API with Uvicorn."""
from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
  logging.basicConfig(level=os.getenv("PRYLICS_LOG_LEVEL", "INFO").upper())
  port = int(os.getenv("PRYLICS_PORT", "8000"))
  reload = os.getenv("UVICORN_RELOAD", "false").lower() == "true"
  uvicorn.run("prylics.main:app", host=os.getenv("PRYLICS_HOST", "0.0.0.0"), port=port, reload=reload)


if __name__ == "__main__":
  main()
