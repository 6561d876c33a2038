"""
Unit tests for the per-invocation workspace.
"""
import warnings
from unittest.mock import patch

import pytest

from recording_converter.core.exceptions import LocalIOError
from recording_converter.infrastructure.workspace import invocation_workspace


@pytest.mark.unit
class TestInvocationWorkspace:

    def test_work_item_paths_mirror_key(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            item = workspace.work_item_for('recordings/2024/call123.wav')

            assert item.input_path == workspace.path / 'input' / 'recordings' / '2024' / 'call123.wav'
            assert item.output_path == workspace.path / 'output' / 'recordings' / '2024' / 'call123.wav'
            assert item.input_path.parent.is_dir()
            assert item.output_path.parent.is_dir()

    def test_directory_creation_is_idempotent(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            first = workspace.work_item_for('recordings/call123.wav')
            second = workspace.work_item_for('recordings/call123.wav')

        assert first == second

    def test_workspace_is_removed_on_exit(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            item = workspace.work_item_for('recordings/call123.wav')
            workspace.write_input(item, b'data')
            assert item.input_path.read_bytes() == b'data'

        assert not workspace.path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_workspace_is_removed_on_failure(self, tmp_path):
        with pytest.raises(RuntimeError):
            with invocation_workspace(str(tmp_path), 'req-1') as workspace:
                workspace.work_item_for('recordings/call123.wav')
                raise RuntimeError('boom')

        assert list(tmp_path.iterdir()) == []

    def test_same_invocation_id_gets_distinct_directories(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as first:
            with invocation_workspace(str(tmp_path), 'req-1') as second:
                assert first.path != second.path
                assert first.path.name.startswith('invocation-req-1-')

    def test_missing_invocation_id(self, tmp_path):
        with invocation_workspace(str(tmp_path)) as workspace:
            assert workspace.path.parent == tmp_path

    def test_invocation_id_is_sanitized(self, tmp_path):
        with invocation_workspace(str(tmp_path), '../../evil') as workspace:
            assert workspace.path.parent == tmp_path

    @pytest.mark.parametrize('key', ['../escape.wav', 'recordings/../../escape.wav', '/', ''])
    def test_unsafe_keys_are_rejected(self, tmp_path, key):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            with pytest.raises(LocalIOError):
                workspace.work_item_for(key)

    def test_leading_slash_stays_inside_workspace(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            item = workspace.work_item_for('/recordings/call.wav')

            assert item.input_path == workspace.input_root / 'recordings' / 'call.wav'

    def test_mkdir_failure(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            with patch('pathlib.Path.mkdir', side_effect=PermissionError('read-only')):
                with pytest.raises(LocalIOError, match='Cannot create directory') as exc_info:
                    workspace.work_item_for('recordings/call.wav')

        assert exc_info.value.operation == 'mkdir'

    def test_write_failure(self, tmp_path):
        with invocation_workspace(str(tmp_path), 'req-1') as workspace:
            item = workspace.work_item_for('recordings/call.wav')
            item.input_path.mkdir()

            with pytest.raises(LocalIOError, match='Cannot write input file'):
                workspace.write_input(item, b'data')

    def test_root_not_creatable(self, tmp_path):
        blocker = tmp_path / 'file'
        blocker.write_text('x')

        with pytest.raises(LocalIOError, match='Cannot create invocation workspace'):
            with invocation_workspace(str(blocker), 'req-1'):
                pass

    def test_cleanup_failure_is_logged_not_raised(self, tmp_path, caplog):
        with warnings.catch_warnings():
            warnings.simplefilter('error', DeprecationWarning)
            with patch('os.unlink', side_effect=PermissionError('busy')):
                with invocation_workspace(str(tmp_path), 'req-1') as workspace:
                    item = workspace.work_item_for('recordings/call.wav')
                    workspace.write_input(item, b'data')

        cleanup_warnings = [
            record for record in caplog.records
            if record.getMessage() == 'Failed to clean up workspace entry'
        ]
        assert cleanup_warnings
        assert 'busy' in cleanup_warnings[0].error
