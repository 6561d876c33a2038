"""
Lambda handler for converting recordings uploaded to S3.

Event Flow:
1. A recording upload triggers the Lambda with an ObjectCreated event
2. Handler filters the batch down to ObjectCreated:Put records
3. Each recording is fetched, converted to MP3 and republished under mp3/
"""

# Delegate to the presentation layer handler
from .presentation.lambda_handler import lambda_handler

__all__ = ['lambda_handler']
