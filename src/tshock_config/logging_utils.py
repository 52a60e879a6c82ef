from loguru import logger
import os
import sys
import time
from contextlib import contextmanager
from typing import Optional


def setup_logging(log_file: Optional[str] = None, log_level: str = "INFO"):
    """Configure loguru sinks: colored console output plus an optional rotating file."""
    # LOGURU_LEVEL overrides the argument
    env_log_level = os.environ.get('LOGURU_LEVEL')
    if env_log_level:
        log_level = env_log_level.upper()

    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )
    logger.add(
        sys.stderr,
        level=log_level,
        format=console_format,
        colorize=True
    )

    if log_file:
        os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)
        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
            "{name}:{function}:{line} | {message}"
        )
        try:
            logger.add(
                log_file,
                level=log_level,
                format=file_format,
                rotation="10 MB",
                retention="30 days",
                encoding="utf-8",
                enqueue=True,
            )
        except (PermissionError, OSError) as exc:
            logger.warning(f"Cannot open log file {log_file} ({exc}); logging to console only.")

    return logger


@contextmanager
def log_operation(operation_name: str, **context):
    """Log the start, end and duration of an operation; failures are logged and re-raised."""
    bound = logger.bind(operation=operation_name, **context)
    start_time = time.time()
    bound.debug(f"Starting operation: {operation_name}")

    try:
        yield
        execution_time = time.time() - start_time
        bound.info(f"Operation completed: {operation_name} ({execution_time:.3f}s)")
    except Exception as e:
        execution_time = time.time() - start_time
        bound.error(f"Operation failed: {operation_name} ({execution_time:.3f}s): {e}")
        raise
