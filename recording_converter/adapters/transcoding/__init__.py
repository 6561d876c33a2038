from .ffmpeg_transcoder import FFmpegTranscoder, resolve_executable

__all__ = ['FFmpegTranscoder', 'resolve_executable']
