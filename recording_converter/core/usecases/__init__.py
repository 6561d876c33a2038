from .convert_recording import ConvertRecordingUseCase, failed_outcome

__all__ = ['ConvertRecordingUseCase', 'failed_outcome']
