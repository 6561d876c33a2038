"""
Integration tests running the real ffmpeg/ffprobe executables.

Skipped when the executables are not on PATH.
"""
import shutil
import subprocess

import pytest

from recording_converter.adapters.transcoding.ffmpeg_transcoder import FFmpegTranscoder
from recording_converter.application.conversion_orchestrator import ConversionOrchestrator
from recording_converter.core.exceptions import TranscodeError
from recording_converter.core.models.conversion_profile import MP3_VOICE_PROFILE
from recording_converter.core.services.output_keys import OutputKeyGenerator
from recording_converter.core.usecases.convert_recording import ConvertRecordingUseCase
from tests.utils.mock_helpers import InMemoryObjectStorage, MockHelpers

FFMPEG = shutil.which('ffmpeg')
FFPROBE = shutil.which('ffprobe')

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not (FFMPEG and FFPROBE), reason='ffmpeg and ffprobe are required'),
]


@pytest.fixture
def transcoder():
    return FFmpegTranscoder(FFMPEG, FFPROBE)


@pytest.fixture
def telephone_wav(tmp_path):
    path = tmp_path / 'call.wav'
    path.write_bytes(MockHelpers.create_wav_bytes(seconds=10.0, sample_rate=8000))
    return path


@pytest.fixture
def video_with_audio(tmp_path):
    """Two seconds of test-pattern video with a sine audio track."""
    path = tmp_path / 'clip.mp4'
    subprocess.run([
        FFMPEG, '-hide_banner', '-nostdin', '-y',
        '-f', 'lavfi', '-i', 'testsrc=size=160x120:rate=10:duration=2',
        '-f', 'lavfi', '-i', 'sine=frequency=440:sample_rate=44100:duration=2',
        '-c:v', 'mpeg4', '-c:a', 'aac', '-shortest',
        str(path)
    ], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=True)
    return path


def _assert_voice_profile(streams):
    assert len(streams) == 1
    audio = streams[0]
    assert audio['codec_type'] == 'audio'
    assert audio['codec_name'] == 'mp3'
    assert audio['channels'] == 1
    assert int(audio['sample_rate']) == 48000
    assert 30000 <= int(audio['bit_rate']) <= 34000


class TestFFmpegConversion:

    def test_output_matches_voice_profile(self, transcoder, telephone_wav, tmp_path):
        output = transcoder.convert(telephone_wav, tmp_path / 'call.mp3', MP3_VOICE_PROFILE)

        _assert_voice_profile(transcoder.probe(output)['streams'])

    def test_converted_output_converts_again(self, transcoder, telephone_wav, tmp_path):
        first = transcoder.convert(telephone_wav, tmp_path / 'first.mp3', MP3_VOICE_PROFILE)

        second = transcoder.convert(first, tmp_path / 'second.mp3', MP3_VOICE_PROFILE)

        assert second.stat().st_size > 0
        _assert_voice_profile(transcoder.probe(second)['streams'])

    def test_video_track_is_dropped(self, transcoder, video_with_audio, tmp_path):
        source_types = {stream['codec_type'] for stream in transcoder.probe(video_with_audio)['streams']}
        assert source_types == {'audio', 'video'}

        output = transcoder.convert(video_with_audio, tmp_path / 'clip.mp3', MP3_VOICE_PROFILE)

        streams = transcoder.probe(output)['streams']
        assert [stream['codec_type'] for stream in streams] == ['audio']
        assert streams[0]['channels'] == 1
        assert int(streams[0]['sample_rate']) == 48000

    def test_stereo_input_is_downmixed(self, transcoder, tmp_path):
        source = tmp_path / 'stereo.wav'
        source.write_bytes(MockHelpers.create_wav_bytes(seconds=2.0, sample_rate=44100, channels=2))

        output = transcoder.convert(source, tmp_path / 'stereo.mp3', MP3_VOICE_PROFILE)

        assert transcoder.probe(output)['streams'][0]['channels'] == 1

    def test_corrupt_input_raises(self, transcoder, tmp_path):
        source = tmp_path / 'broken.wav'
        source.write_bytes(b'CORRUPT' * 100)
        output_path = tmp_path / 'broken.mp3'

        with pytest.raises(TranscodeError):
            transcoder.convert(source, output_path, MP3_VOICE_PROFILE)

        assert not output_path.exists()

    def test_batch_with_one_corrupt_recording(self, transcoder, tmp_path):
        storage = InMemoryObjectStorage({
            ('test-recordings', 'recordings/call 1.wav'): MockHelpers.create_wav_bytes(seconds=3.0),
            ('test-recordings', 'recordings/broken.wav'): b'CORRUPT' * 100,
        })
        use_case = ConvertRecordingUseCase(storage, transcoder, OutputKeyGenerator(strategy='source'))
        event = MockHelpers.create_s3_event(
            MockHelpers.create_s3_record('recordings/call+1.wav'),
            MockHelpers.create_s3_record('recordings/broken.wav'),
        )
        workspace_root = tmp_path / 'work'
        workspace_root.mkdir()

        batch = ConversionOrchestrator(use_case, str(workspace_root)).process_event(event, invocation_id='it-1')

        assert [outcome.success for outcome in batch.outcomes] == [True, False]
        published = storage.objects[('test-recordings', 'mp3/recordings/call 1.mp3')]
        assert published[:3] == b'ID3' or published[0] == 0xFF
        assert storage.metadata[('test-recordings', 'mp3/recordings/call 1.mp3')]['source-key'] == 'recordings/call 1.wav'
        assert list(workspace_root.iterdir()) == []
