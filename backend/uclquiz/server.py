import uvicorn

from .db import settings
from .logging_config import configure_logging


def run() -> None:
    configure_logging()
    uvicorn.run("backend.uclquiz.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
