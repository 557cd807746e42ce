"""ASGI entrypoint: `uvicorn polyglot_blog.asgi:app` or `polyglot-blog`."""

from __future__ import annotations

import uvicorn

from .main import create_app
from .settings import get_settings

app = create_app()


def serve() -> None:
    settings = get_settings()
    # log_config=None keeps the structlog JSON handlers installed by create_app.
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    serve()
