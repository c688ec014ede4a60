"""Logging configuration for the application"""
import inspect
import logging
import sys
from pathlib import Path
from typing import Optional
from powerfolio.core.config import settings

# Use absolute path relative to project root
_project_root = Path(__file__).parent.parent.parent
logs_dir = _project_root / "logs"


def setup_logging(
    name: str = "powerfolio",
    log_level: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration
    
    Args:
        name: Logger name (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name, written under the logs/ directory
    
    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = "DEBUG" if settings.DEBUG else "INFO"
    
    level = getattr(logging, log_level.upper(), logging.INFO)
    
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    # Avoid duplicate handlers
    if logger.handlers:
        return logger
    
    detailed_formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    simple_formatter = logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        logs_dir.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(logs_dir / log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with default configuration
    
    Args:
        name: Logger name (usually __name__). If None, uses caller's module name.
    
    Returns:
        Logger instance
    """
    if name is None:
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get('__name__', 'powerfolio')
        else:
            name = 'powerfolio'
    
    logger = logging.getLogger(name)
    
    # If logger doesn't have handlers, set it up
    if not logger.handlers:
        return setup_logging(name)
    
    return logger
