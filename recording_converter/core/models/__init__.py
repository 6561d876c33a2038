from .object_reference import ObjectReference
from .conversion_profile import ConversionProfile, MP3_VOICE_PROFILE
from .work_item import LocalWorkItem
from .conversion_result import BatchResult, PublishedResult, RecordOutcome, RecordState

__all__ = [
    'ObjectReference',
    'ConversionProfile',
    'MP3_VOICE_PROFILE',
    'LocalWorkItem',
    'BatchResult',
    'PublishedResult',
    'RecordOutcome',
    'RecordState'
]
