"""
Shared test configuration and fixtures for the recording converter tests.
"""
import os

# Set test environment variables before the package builds its settings
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')
os.environ.setdefault('AWS_ACCESS_KEY_ID', 'testing')
os.environ.setdefault('AWS_SECRET_ACCESS_KEY', 'testing')

import pytest
from unittest.mock import Mock

from recording_converter.config.settings import ConverterSettings
from recording_converter.core.services.output_keys import OutputKeyGenerator
from recording_converter.core.usecases.convert_recording import ConvertRecordingUseCase
from tests.utils.mock_helpers import CopyTranscoder, InMemoryObjectStorage, MockHelpers


# ENVIRONMENT & CONFIGURATION FIXTURES

@pytest.fixture
def test_settings(monkeypatch, tmp_path):
    """Create ConverterSettings instance with test configuration."""
    test_env = MockHelpers.create_test_environment_config()
    test_env['WORKSPACE_ROOT'] = str(tmp_path)
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)
    return ConverterSettings(_env_file=None)


# EVENT FIXTURES

@pytest.fixture
def mock_s3_event():
    """Sample S3 event with a single recording upload."""
    return MockHelpers.create_s3_event(
        MockHelpers.create_s3_record('recordings/call123.wav')
    )


@pytest.fixture
def mock_lambda_context():
    """Mock Lambda context for testing."""
    context = Mock()
    context.function_name = 'AudioConversionHandler'
    context.aws_request_id = 'test-request-id-123'
    context.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:AudioConversionHandler'
    context.get_remaining_time_in_millis.return_value = 600000
    return context


@pytest.fixture
def sample_wav_bytes():
    """One second of mono 8 kHz PCM audio."""
    return MockHelpers.create_wav_bytes(seconds=1.0, sample_rate=8000)


# COLLABORATOR FIXTURES

@pytest.fixture
def memory_storage(sample_wav_bytes):
    """In-memory object storage holding one recording."""
    return InMemoryObjectStorage({
        ('test-recordings', 'recordings/call123.wav'): sample_wav_bytes
    })


@pytest.fixture
def copy_transcoder():
    """Transcoder fake that fails on inputs starting with b'CORRUPT'."""
    return CopyTranscoder(fail_on=b'CORRUPT')


@pytest.fixture
def convert_use_case(memory_storage, copy_transcoder):
    """Convert recording use case wired to in-memory collaborators."""
    return ConvertRecordingUseCase(
        storage=memory_storage,
        transcoder=copy_transcoder,
        key_generator=OutputKeyGenerator(prefix='mp3/', strategy='timestamp')
    )
