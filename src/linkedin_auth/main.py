"""Demo host app serving the LinkedIn strategy."""

import logging
import os
from functools import lru_cache

from fastapi import FastAPI

from . import __version__
from .auth.router import create_router
from .auth.providers.linkedin import LinkedInStrategy

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@lru_cache
def get_strategy() -> LinkedInStrategy:
    """Strategy configured from the environment."""
    return LinkedInStrategy()


app = FastAPI(
    title="LinkedIn Auth",
    description="LinkedIn OAuth2 sign-in",
    version=__version__,
)

app.include_router(create_router(get_strategy))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "linkedin_enabled": get_strategy().config.enabled}


def main():
    """Run the demo server."""
    import uvicorn

    host = os.environ.get("LINKEDIN_AUTH_HOST", "127.0.0.1")
    port = int(os.environ.get("LINKEDIN_AUTH_PORT", "8086"))

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
