"""Tests for the @build/generic module."""

import subprocess
import sys
from unittest.mock import patch

import pytest

from redstart.exceptions import StepFailedError
from redstart.modules.base import StepContext
from redstart.modules.build import GenericBuild


def make_context(tmp_path, **options):
    return StepContext(step_type='@build/generic', options=options, cwd=tmp_path)


def completed(returncode=0, stdout='', stderr=''):
    return subprocess.CompletedProcess([], returncode, stdout, stderr)


class TestGenericBuildValidate:
    """Tests for GenericBuild.validate."""

    def test_command_only(self, tmp_path):
        assert GenericBuild().validate(make_context(tmp_path, command='make'))

    def test_arguments_scalar_or_array(self, tmp_path):
        module = GenericBuild()
        assert module.validate(make_context(tmp_path, command='make', arguments='all'))
        assert module.validate(make_context(tmp_path, command='make', arguments=['-j', 4]))

    def test_missing_command(self, tmp_path):
        assert not GenericBuild().validate(make_context(tmp_path, arguments='x'))

    def test_command_must_be_string(self, tmp_path):
        assert not GenericBuild().validate(make_context(tmp_path, command=['a', 'b']))


class TestGenericBuildInitiate:
    """Tests for GenericBuild.initiate."""

    def test_runs_command_in_cwd(self, tmp_path):
        """Test arguments are stringified and the step's cwd is used."""
        with patch('redstart.modules.build.subprocess.run', return_value=completed()) as run:
            GenericBuild().initiate(
                make_context(tmp_path, command='make', arguments=['-j', 4])
            )
        run.assert_called_once_with(
            ['make', '-j', '4'],
            cwd=tmp_path,
            capture_output=True,
            text=True,
        )

    def test_single_argument(self, tmp_path):
        with patch('redstart.modules.build.subprocess.run', return_value=completed()) as run:
            GenericBuild().initiate(make_context(tmp_path, command='make', arguments='all'))
        assert run.call_args[0][0] == ['make', 'all']

    def test_no_arguments(self, tmp_path):
        with patch('redstart.modules.build.subprocess.run', return_value=completed()) as run:
            GenericBuild().initiate(make_context(tmp_path, command='make'))
        assert run.call_args[0][0] == ['make']

    def test_non_zero_exit(self, tmp_path):
        with patch('redstart.modules.build.subprocess.run', return_value=completed(2)):
            with pytest.raises(StepFailedError, match="make exited with 2"):
                GenericBuild().initiate(make_context(tmp_path, command='make'))

    def test_missing_program(self, tmp_path):
        with patch('redstart.modules.build.subprocess.run', side_effect=FileNotFoundError('nope')):
            with pytest.raises(StepFailedError, match="Could not run make"):
                GenericBuild().initiate(make_context(tmp_path, command='make'))

    def test_real_process(self, tmp_path):
        """Test a real program runs in the step directory."""
        GenericBuild().initiate(make_context(
            tmp_path,
            command=sys.executable,
            arguments=['-c', 'open("built.txt", "w").write("ok")'],
        ))
        assert (tmp_path / 'built.txt').read_text() == 'ok'
