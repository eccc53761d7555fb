import uvicorn

from regional_blog.config import settings
from regional_blog.main import app  # noqa: F401
from regional_blog.middleware.logging import setup_structured_logging

setup_structured_logging(log_level=settings.log_level, json_format=settings.log_json)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
