"""Entry point for the Blog Posts API server.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under a process manager or
in Docker, where you only specify a single Python file to run.

Configuration such as APP_ENV, PORT, CORS_ORIGIN and STATIC_DIR is read
from the environment; outside production a `.env` file in the same
directory is loaded as well.  See `.env.example` for the supported
variables.

An exception escaping the server terminates the process with exit
status 1 so the supervisor can restart it.

Usage:
    python run.py
"""
from uvicorn import Config, Server

from blog_api.app.core.config import settings
from blog_api.app.core.process import run_supervised
from blog_api.app.main import app


async def serve() -> None:
    """Serve the API until shutdown.

    Host and port come from the `HOST` and `PORT` environment variables.
    Defaults are `0.0.0.0` and `3000`.
    """
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        run_supervised(serve)
    except KeyboardInterrupt:
        pass
