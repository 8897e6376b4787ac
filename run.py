from cli import cli
from config.settings import settings
from utils.logger_utils import configure_logging, get_logger

configure_logging(log_level=settings.app.log_level)
logger = get_logger("Run Entry Point")

if __name__ == "__main__":
    logger.debug(f"Starting {settings.app.name}")
    cli()
