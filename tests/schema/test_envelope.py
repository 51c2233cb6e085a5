"""
Tests for the schema marker envelope.
"""

from dotenv_shield.schema.envelope import split_envelope, unwrap, wrap

WRAPPED = 'header\n// dotenv-shield:start\n{"a": 1}\n// dotenv-shield:end\nfooter\n'


class TestEnvelope:
    def test_split(self):
        envelope = split_envelope(WRAPPED)

        assert envelope is not None
        assert envelope.before == "header\n"
        assert envelope.body == '{"a": 1}'
        assert envelope.after == "\nfooter\n"

    def test_missing_marker(self):
        assert split_envelope('// dotenv-shield:start\n{"a": 1}\n') is None
        assert split_envelope('{"a": 1}') is None

    def test_unwrap(self):
        assert unwrap(WRAPPED) == '{"a": 1}'
        assert unwrap('{"a": 1}') == '{"a": 1}'

    def test_wrap_preserves_outer_text(self):
        assert wrap('{"b": 2}', WRAPPED) == (
            'header\n// dotenv-shield:start\n{"b": 2}\n// dotenv-shield:end\nfooter\n'
        )

    def test_wrap_without_existing_markers(self):
        expected = '// dotenv-shield:start\n{"b": 2}\n// dotenv-shield:end\n'
        assert wrap('{"b": 2}') == expected
        assert wrap('{"b": 2}', '{"old": true}') == expected
