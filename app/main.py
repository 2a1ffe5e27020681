"""Process entrypoint: ``uvicorn app.main:app`` or ``python -m app.main``.

Settings are read once here; a missing API key stops the process before it
starts listening.
"""
from __future__ import annotations

import uvicorn

from .config import Settings
from .server import create_app

settings = Settings.from_env()
app = create_app(settings)


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
