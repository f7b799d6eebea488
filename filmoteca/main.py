"""FastAPI application entrypoint. No business logic; only wiring."""

import logging

from dotenv import load_dotenv

load_dotenv()

from filmoteca.factory import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

# Fails here when required settings (JWT_SECRET) are missing.
app = create_app()


def run() -> None:
    """Console entrypoint: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=3001)
