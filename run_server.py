import os

import uvicorn

from radar_api.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="weather-radar-backend")
    port = int(os.getenv("PORT", 5003))
    logger.info(f"Server is running on port {port}")

    uvicorn.run(
        "radar_api.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
    )
