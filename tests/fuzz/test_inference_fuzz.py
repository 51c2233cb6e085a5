"""
Fuzz tests for type inference and the generate/validate round trip.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from dotenv_shield.core.inference import InferredType, infer_type, is_port_value
from dotenv_shield.schema.builder import build_schema
from dotenv_shield.schema.models import dump_structural_type, structural_type_for
from dotenv_shield.validation import validate

printable = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=40)

env_values = st.one_of(
    printable,
    st.integers(min_value=-(10**12), max_value=10**12).map(str),
    st.floats(allow_nan=False, allow_infinity=False, width=32).map(lambda f: f"{f:.3f}"),
    st.sampled_from(
        [
            "true",
            "FALSE",
            "https://api.example.com/v1",
            "ftp://files.example.com",
            "admin@example.com",
            '{"timeout": 30}',
            "[1, 2, 3]",
            "postgres://localhost/db",
        ]
    ),
)

env_keys = st.from_regex(r"[A-Z][A-Z0-9_]{0,15}", fullmatch=True)


@settings(max_examples=200, deadline=1000)
@given(value=st.text(max_size=100))
def test_infer_type_is_total(value: str) -> None:
    """Any text gets a type, never the port refinement."""
    inferred = infer_type(value)
    assert isinstance(inferred, InferredType)
    assert inferred is not InferredType.PORT


@settings(max_examples=100, deadline=1000)
@given(number=st.integers(min_value=0, max_value=200000))
def test_port_refinement(number: int) -> None:
    assert infer_type(str(number)) is InferredType.INTEGER
    assert is_port_value(str(number)) == (1 <= number <= 65535)


@settings(max_examples=75, deadline=2000)
@given(entries=st.dictionaries(env_keys, env_values, min_size=1, max_size=8))
def test_generated_schema_accepts_its_source(entries: dict[str, str]) -> None:
    """A schema built from entries validates those same entries."""
    result = build_schema(entries)
    document = result.schema_document

    for descriptor in document["properties"].values():
        expected = dump_structural_type(structural_type_for(descriptor["_meta"]["originalType"]))
        assert descriptor["type"] == expected

    report = validate(document, entries)
    assert report.errors == []
    assert report.validated_count == sum(1 for value in entries.values() if value != "")
