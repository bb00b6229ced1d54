import logging
import sys

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Chatty libraries on the request path (HTTP client, provider SDKs)
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "google_genai", "openai", "groq")


def setup_logging(level: str = "INFO", log_format: str = DEFAULT_LOG_FORMAT) -> None:
    """Configure application-wide logging.

    Provider SDK loggers are held at WARNING so request bodies they log
    at DEBUG/INFO (which include the conversation) stay out of our output.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
