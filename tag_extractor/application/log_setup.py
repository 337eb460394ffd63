# tag_extractor/application/log_setup.py
import sys
from loguru import logger
from tag_extractor.application.settings import Settings, get_settings

# "{extra[path]}" is the file a record is about; file-access code binds it,
# everything else logs "-"
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>{extra[path]}</magenta> - "
    "<level>{message}</level>"
)


def resolve_level(settings: Settings) -> str:
    if settings.log_level:
        return settings.log_level.upper()
    return "DEBUG" if settings.debug else "INFO"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Loguru: a stdout sink, plus a rotating file when `log_file` is set."""
    settings = settings or get_settings()
    level = resolve_level(settings)

    logger.remove()
    logger.configure(extra={"path": "-"})
    logger.add(sys.stdout, level=level, format=LOG_FORMAT, backtrace=False, diagnose=False)

    if settings.log_file:
        logger.add(
            settings.log_file,
            level=level,
            format=LOG_FORMAT,
            colorize=False,
            rotation="10 MB",
            retention=3,
            encoding="utf-8",
        )
    logger.debug("Logging configured at {} (data_dir={})", level, settings.data_dir)
