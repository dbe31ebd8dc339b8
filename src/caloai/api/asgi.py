"""ASGI entrypoint for the CaloAI API."""

import uvicorn

from caloai.api.app import create_app
from caloai.containers import build_container

app = create_app(build_container())


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    settings = app.state.container.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
