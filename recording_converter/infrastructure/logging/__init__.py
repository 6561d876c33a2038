from .log_config import configure_logging, logging_manager, JSONFormatter, DevelopmentFormatter
from .log_decorators import log_operation

__all__ = [
    'configure_logging',
    'logging_manager',
    'JSONFormatter',
    'DevelopmentFormatter',
    'log_operation'
]
