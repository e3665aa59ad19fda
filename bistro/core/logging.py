import logging
import sys

class EndpointFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.getMessage().find("/health") == -1

def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        stream=sys.stdout,
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    
    # Filter health checks from access logs
    logging.getLogger("uvicorn.access").addFilter(EndpointFilter())

    # httpx logs every request line at INFO, including the weather API key in the query
    logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger("bistro")
