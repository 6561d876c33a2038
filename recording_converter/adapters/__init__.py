"""
Adapters implementing the core ports against S3 and ffmpeg.
"""
