"""
Recording Converter Lambda Function.

Converts voice recordings uploaded to S3 into mono MP3 and republishes them
under a well-known prefix for downstream consumers.

Architecture:
- Event-driven processing triggered by S3 ObjectCreated events
- ffmpeg from a Lambda layer does the transcoding
- Each invocation works in its own local workspace

The converter handles:
1. S3 event filtering
2. Recording download into the invocation workspace
3. Transcoding to the fixed MP3 voice profile
4. Publishing the result back to the bucket
"""

__version__ = "1.0.0"
