"""Tests for the parsed project data model."""

import pytest

from redstart.model import ParseResult, Step


class TestStep:
    """Tests for Step."""

    def test_defaults(self):
        step = Step('build')
        assert step.cwd == '.'
        assert step.options == {}

    def test_options_are_copied(self):
        """Test later changes to the source dict do not reach the step."""
        source = {'x': 1}
        step = Step('build', '.', source)
        source['x'] = 2
        assert step.options == {'x': 1}

    def test_options_are_read_only(self):
        step = Step('build', '.', {'x': 1})
        with pytest.raises(TypeError):
            step.options['y'] = 2
        with pytest.raises(TypeError):
            del step.options['x']

    def test_to_dict(self):
        step = Step('build', 'src', {'x': [1, 2]})
        assert step.to_dict() == {'type': 'build', 'cwd': 'src', 'options': {'x': [1, 2]}}
        assert type(step.to_dict()['options']) is dict


class TestParseResult:
    """Tests for ParseResult."""

    def test_to_dict(self):
        result = ParseResult(
            jobs={'build': [Step('compile', '.', {'n': 1})]},
            settings={'flag': True},
            modules=['compile'],
        )
        assert result.to_dict() == {
            'settings': {'flag': True},
            'modules': ['compile'],
            'jobs': {'build': [{'type': 'compile', 'cwd': '.', 'options': {'n': 1}}]},
        }
