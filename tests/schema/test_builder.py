"""
Tests for the pure schema builder.
"""

from datetime import datetime, timezone

import pytest

from dotenv_shield.core.errors import EmptyInputError
from dotenv_shield.schema.builder import build_schema, merge_descriptor, type_constraints
from dotenv_shield.core.inference import InferredType

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestBuildSchema:
    def test_sample_scenario(self, sample_entries):
        result = build_schema(sample_entries, now=FIXED_NOW)
        properties = result.schema_document["properties"]

        assert len(properties) == 7
        assert properties["PORT"]["type"] == "integer"
        assert properties["DEBUG"]["type"] == "boolean"
        assert properties["DATABASE_URL"]["type"] == "string"
        assert properties["API_KEY"]["_meta"]["isSecret"] is True
        assert properties["CONFIG"]["type"] == ["object", "array"]
        assert properties["ADMIN_EMAIL"]["format"] == "email"
        assert result.stats.total_vars == 7
        assert result.stats.secret_vars == 1

    def test_document_envelope_fields(self, sample_entries):
        document = build_schema(sample_entries, now=FIXED_NOW).schema_document

        assert document["type"] == "object"
        assert document["additionalProperties"] is False
        assert document["_meta"]["generator"] == "dotenv-shield"
        assert document["_meta"]["generated"] == "2024-05-01T12:00:00.000Z"

    def test_original_type_recorded(self, sample_entries):
        properties = build_schema(sample_entries).schema_document["properties"]

        assert properties["PORT"]["_meta"]["originalType"] == "integer"
        assert properties["CONFIG"]["_meta"]["originalType"] == "json"
        assert properties["DATABASE_URL"]["_meta"]["inferred"] is True

    def test_empty_source_fails(self):
        with pytest.raises(EmptyInputError, match="No environment variables found"):
            build_schema({})

    def test_detected_variables_are_required(self, sample_entries):
        result = build_schema(sample_entries, detected_vars=["PORT", "API_KEY", "UNUSED"])
        document = result.schema_document

        assert document["required"] == ["PORT", "API_KEY"]
        assert document["properties"]["PORT"]["_meta"]["detectedInCode"] is True
        assert document["properties"]["DEBUG"]["_meta"]["detectedInCode"] is False
        assert result.stats.detected_vars == 3
        assert result.stats.required_vars == 2

    def test_example_redacts_secrets(self, sample_entries):
        example = build_schema(sample_entries).example

        assert example["API_KEY"] == "your-secret-here"
        assert "secret123" not in example.values()
        assert example["PORT"] == "3000"
        assert example["CONFIG"] == '{\n  "timeout": 30\n}'

    def test_secret_placeholders_by_type(self):
        example = build_schema(
            {
                "DB_PASSWORD": "hunter2",
                "AUTH_RETRIES": "3",
                "SECRET_WEBHOOK": "https://hooks.example.com/abc",
                "TOKEN_JSON": '{"a": 1}',
            }
        ).example

        assert example["DB_PASSWORD"] == "your-secret-here"
        assert example["AUTH_RETRIES"] == "***"
        assert example["SECRET_WEBHOOK"] == "https://your-secret-url.com"
        assert example["TOKEN_JSON"] == '{"secret": "value"}'

    def test_long_plain_strings_are_truncated_in_example(self):
        example = build_schema({"GREETING": "a sentence that is far too long"}).example
        assert example["GREETING"] == "a sentence that is f..."

    def test_very_long_integer_value(self):
        big = "9" * 5000
        result = build_schema({"BIG": big})

        descriptor = result.schema_document["properties"]["BIG"]
        assert descriptor["type"] == "integer"
        assert descriptor["minimum"] == 0
        assert "maximum" not in descriptor
        assert result.example["BIG"] == big


class TestTypeConstraints:
    def test_port_shaped_integer(self):
        assert type_constraints(InferredType.INTEGER, "3000") == {"minimum": 1, "maximum": 65535}

    def test_zero_and_large_integers(self):
        assert type_constraints(InferredType.INTEGER, "0") == {"minimum": 0}
        assert type_constraints(InferredType.INTEGER, "70000") == {"minimum": 0}

    def test_negative_integer_has_no_bounds(self):
        assert type_constraints(InferredType.INTEGER, "-5") == {}
        assert type_constraints(InferredType.INTEGER, "-0") == {"minimum": 0}

    def test_integer_beyond_digit_limit(self):
        assert type_constraints(InferredType.INTEGER, "9" * 5000) == {"minimum": 0}
        assert type_constraints(InferredType.INTEGER, "-" + "9" * 5000) == {}

    def test_formats(self):
        assert type_constraints(InferredType.URL, "https://x.io") == {"format": "uri"}
        assert type_constraints(InferredType.EMAIL, "a@b.io") == {"format": "email"}

    def test_strings(self):
        assert type_constraints(InferredType.STRING, "abc") == {"minLength": 1}
        assert type_constraints(InferredType.STRING, "") == {}

    def test_other_types(self):
        assert type_constraints(InferredType.BOOLEAN, "true") == {}
        assert type_constraints(InferredType.NUMBER, "1.5") == {}
        assert type_constraints(InferredType.JSON, "[]") == {}


class TestMerge:
    def test_rebuild_from_own_output_is_identical(self, sample_entries):
        first = build_schema(sample_entries, detected_vars=["PORT"], now=FIXED_NOW)
        second = build_schema(
            sample_entries,
            detected_vars=["PORT"],
            existing=first.schema_document,
            now=FIXED_NOW,
        )
        assert second.schema_document == first.schema_document
        assert list(second.schema_document["properties"]) == list(
            first.schema_document["properties"]
        )

    def test_human_edits_survive(self, sample_entries):
        existing = {
            "properties": {
                "PORT": {
                    "type": "integer",
                    "description": "HTTP listen port",
                    "_meta": {"owner": "platform-team", "isSecret": True, "inferred": False},
                },
            },
            "required": [],
        }
        merged = build_schema(sample_entries, existing=existing).schema_document
        port = merged["properties"]["PORT"]

        assert port["description"] == "HTTP listen port"
        assert port["_meta"]["owner"] == "platform-team"
        assert port["_meta"]["inferred"] is False
        # Recomputed, not taken from the previous schema
        assert port["_meta"]["isSecret"] is False
        assert port["minimum"] == 1

    def test_manual_type_override_wins(self):
        existing = {
            "properties": {
                "BUILD_ID": {"type": "string", "description": "Opaque build id", "minLength": 3},
            },
        }
        merged = build_schema({"BUILD_ID": "1234"}, existing=existing).schema_document
        build_id = merged["properties"]["BUILD_ID"]

        assert build_id["type"] == "string"
        assert build_id["minLength"] == 3
        assert "minimum" not in build_id
        assert build_id["_meta"]["originalType"] == "string"

    def test_previous_required_list_is_kept(self, sample_entries):
        existing = {"properties": {"DEBUG": {"type": "boolean"}}, "required": ["DEBUG"]}
        merged = build_schema(sample_entries, existing=existing).schema_document
        assert merged["required"] == ["DEBUG"]

    def test_required_flag_overrides_detection(self, sample_entries):
        existing = {"properties": {"PORT": {"type": "integer", "required": False}}}
        merged = build_schema(
            sample_entries, detected_vars=["PORT"], existing=existing
        ).schema_document

        assert "PORT" not in merged["required"]
        assert merged["properties"]["PORT"]["_meta"]["detectedInCode"] is True

    def test_removed_variables_are_carried_forward(self, sample_entries):
        legacy = {"type": "string", "description": "Old flag", "_meta": {"isSecret": False}}
        old_secret = {"type": "string", "_meta": {"isSecret": True}}
        existing = {
            "properties": {"LEGACY_FLAG": legacy, "OLD_SECRET": old_secret},
            "required": ["LEGACY_FLAG", "LEGACY_FLAG"],
        }
        result = build_schema(sample_entries, existing=existing)
        document = result.schema_document

        assert document["properties"]["LEGACY_FLAG"] == legacy
        assert document["required"] == ["LEGACY_FLAG"]
        assert result.example["LEGACY_FLAG"] == "your-legacy_flag"
        assert result.example["OLD_SECRET"] == "your-secret-here"
        assert result.stats.total_vars == 7

    def test_merge_descriptor_keeps_extra_keys(self):
        fresh = {
            "type": "string",
            "description": "MODE environment variable",
            "minLength": 1,
            "_meta": {"inferred": True, "originalType": "string", "isSecret": False, "detectedInCode": False},
        }
        prior = {"type": "string", "enum": ["dev", "prod"], "_meta": {"originalType": "url"}}
        merged = merge_descriptor(fresh, prior)

        assert merged["enum"] == ["dev", "prod"]
        assert merged["_meta"]["originalType"] == "string"
        assert list(merged)[-1] == "_meta"
