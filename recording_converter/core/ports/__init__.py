from .storage_service import ObjectStoragePort
from .transcoder import TranscoderPort

__all__ = ['ObjectStoragePort', 'TranscoderPort']
