from .event_filter import OBJECT_CREATED_PUT, select_created_objects
from .output_keys import OutputKeyGenerator

__all__ = ['OBJECT_CREATED_PUT', 'select_created_objects', 'OutputKeyGenerator']
