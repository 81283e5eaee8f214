# File: yaxis_units/utils/error_handling.py
"""
Error handling and logging for the Y-axis unit selector.
"""

import logging
import traceback
import streamlit as st
from typing import Any, Callable, Optional
from functools import wraps

from ..config.settings import UnitSelectorConfig

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure root logging once for the application.

    Args:
        level: Logging level name; defaults to UnitSelectorConfig.LOGGING['level']
        log_file: Optional file to log to in addition to stderr
    """
    settings = UnitSelectorConfig.LOGGING
    handlers = [logging.StreamHandler()]
    log_file = log_file or settings['file']
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=(level or settings['level']).upper(),
        format=settings['format'],
        handlers=handlers
    )


def handle_errors(operation_name: str, fallback: Any = None, show_error: bool = False):
    """
    Decorator for handling errors in operations.

    Args:
        operation_name: Name of the operation for logging
        fallback: Value returned when the operation raises
        show_error: Whether to show error in Streamlit UI
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                error_msg = f"Error in {operation_name}: {str(e)}"
                logger.error(f"{error_msg}\n{traceback.format_exc()}")

                if show_error:
                    st.error(f"❌ {error_msg}")

                return fallback
        return wrapper
    return decorator


def handle_async_errors(operation_name: str, fallback: Any = None):
    """Coroutine variant of handle_errors (no UI output)."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in {operation_name}: {str(e)}\n{traceback.format_exc()}")
                return fallback
        return wrapper
    return decorator
