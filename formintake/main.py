from prometheus_fastapi_instrumentator import Instrumentator

from formintake.core.config import settings
from formintake.core.logging import configure_logging
from . import app as base_app

configure_logging(settings.LOG_LEVEL)
app = base_app
instrumentator = Instrumentator().instrument(app)
instrumentator.expose(app, include_in_schema=False)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}


def run() -> None:
    import uvicorn

    uvicorn.run("formintake.main:app", host=settings.HOST, port=settings.PORT)
