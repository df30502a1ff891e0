"""Console logging: progress to stdout, warnings and failures to stderr."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ConsoleHandler(logging.StreamHandler):
    """Stream handler bound to ``sys.stdout`` or ``sys.stderr`` by name.
    
    The stream is looked up on every write, so a replaced ``sys.stderr``
    (CI wrappers, pytest capture) still receives the records.
    """
    
    def __init__(self, stream_name: str):
        self.stream_name = stream_name
        super().__init__()
    
    @property
    def stream(self):
        return getattr(sys, self.stream_name)
    
    @stream.setter
    def stream(self, value):
        pass


class BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""
    
    def __init__(self, level: int):
        super().__init__()
        self.level = level
    
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def build_console_handlers(split_level: int = logging.WARNING) -> list[logging.Handler]:
    """Create the stdout/stderr handler pair.
    
    Records below ``split_level`` go to stdout; ``split_level`` and above go
    to stderr, so failure reports land on the error channel.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    
    progress = ConsoleHandler("stdout")
    progress.addFilter(BelowLevelFilter(split_level))
    progress.setFormatter(formatter)
    
    errors = ConsoleHandler("stderr")
    errors.setLevel(split_level)
    errors.setFormatter(formatter)
    
    return [progress, errors]


def setup_logger(log_level: str = "INFO", name: str = "release_notes") -> logging.Logger:
    """
    Configure root logging and return the named application logger.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        name: Logger name (default: release_notes)
        
    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    
    # force=True replaces handlers from any earlier call
    logging.basicConfig(
        level=numeric_level,
        handlers=build_console_handlers(),
        force=True,
    )
    
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    
    return logger
