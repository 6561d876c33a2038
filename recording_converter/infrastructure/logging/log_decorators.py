"""
Logging decorators for adapter operations.
Emit structured start/completion/failure lines with timing for each call.
"""
import functools
import logging
import time
from typing import Any, Callable, Dict, Optional


def _describe_result(result: Any) -> Dict[str, Any]:
    if isinstance(result, (bytes, bytearray)):
        return {"result_type": "bytes", "result_size": len(result)}
    if hasattr(result, "to_dict"):
        return {"result": result.to_dict()}
    return {"result_type": type(result).__name__, "result": str(result)}


def log_operation(
    operation: str,
    level: str = "INFO",
    include_result: bool = True,
    context: Optional[Callable[..., Dict[str, Any]]] = None
) -> Callable:
    """
    Decorator for adapter methods.

    Args:
        operation: Operation name shown in the log lines
        level: Logging level for start/completion lines (failures log at ERROR)
        include_result: Whether to log a summary of the return value
        context: Optional callable receiving the call's arguments and
            returning extra fields for every line

    Returns:
        Decorated method with automatic structured logging
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger = logging.getLogger(f"{func.__module__}.{self.__class__.__name__}")
            log_level = getattr(logging, level.upper(), logging.INFO)

            fields = {"operation": operation, "component": self.__class__.__name__}
            if context is not None:
                fields.update(context(*args, **kwargs))

            logger.log(log_level, f"Starting {operation}", extra={"extra_fields": dict(fields, status="started")})
            start_time = time.perf_counter()

            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
                logger.error(f"Failed {operation}", extra={"extra_fields": dict(
                    fields,
                    status="failed",
                    duration_ms=duration_ms,
                    error=str(e),
                    error_type=type(e).__name__
                )})
                raise

            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            success_fields = dict(fields, status="completed", duration_ms=duration_ms)
            if include_result and result is not None:
                success_fields.update(_describe_result(result))
            logger.log(log_level, f"Completed {operation}", extra={"extra_fields": success_fields})
            return result

        return wrapper
    return decorator
