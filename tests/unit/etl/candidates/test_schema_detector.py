"""
Unit tests for schema detection and the field extraction helpers.
"""
import pytest

from core.exceptions import EmptySchemaError
from etl.candidates.schema_detector import (
    SAMPLE_SIZE,
    classify_key,
    detect_schema,
    extract_array_field,
    extract_field_value,
    normalize_key,
)


class TestClassifyKey:

    @pytest.mark.parametrize("key,category", [
        ("full_name", "name"),
        ("Full Name", "name"),
        ("email_address", "email"),
        ("Mobile", "phone"),
        ("job-title", "role"),
        ("work_history", "experience"),
        ("tech_stack", "skill"),
        ("university", "education"),
        ("expected_salary", "salary"),
        ("city", "location"),
        ("github", "portfolio"),
    ])
    def test_known_keys(self, key, category):
        assert classify_key(key) == category

    def test_unmatched_key_is_unknown(self):
        assert classify_key("favourite_color") is None

    def test_table_order_breaks_ties(self):
        # contains both "name" and "title"; name is listed first
        assert classify_key("title_name") == "name"

    def test_email_address_is_not_location(self):
        assert classify_key("emailAddress") == "email"

    def test_normalize_key_strips_separators(self):
        assert normalize_key("Email_Address - Primary") == "emailaddressprimary"


class TestDetectSchema:

    def test_empty_records_raise(self):
        with pytest.raises(EmptySchemaError, match="empty candidate array"):
            detect_schema([])

    def test_buckets_keys_in_first_seen_order(self):
        records = [
            {"name": "A", "email": "a@x.io", "skills": []},
            {"email": "b@x.io", "contact_email": "c@x.io", "hobby": "chess"},
        ]
        schema = detect_schema(records)

        assert schema.name_fields == ("name",)
        assert schema.email_fields == ("email", "contact_email")
        assert schema.skill_fields == ("skills",)
        assert schema.unknown_fields == ("hobby",)

    def test_only_samples_leading_records(self):
        records = [{"name": "A"}] * SAMPLE_SIZE + [{"name": "B", "salary": 1}]
        schema = detect_schema(records)

        assert schema.salary_fields == ()

    def test_schema_is_immutable(self):
        schema = detect_schema([{"name": "A"}])
        with pytest.raises(Exception):
            schema.name_fields = ("other",)

    def test_to_dict_uses_wire_names(self):
        data = detect_schema([{"name": "A", "skills": ["x"]}]).to_dict()

        assert data["nameFields"] == ["name"]
        assert data["skillFields"] == ["skills"]
        assert data["unknownFields"] == []


class TestExtractionHelpers:

    def test_field_value_skips_empty_strings_and_none(self):
        record = {"name": "", "full_name": None, "candidate_name": "Ada"}
        assert extract_field_value(record, ["name", "full_name", "candidate_name"]) == "Ada"

    def test_field_value_keeps_falsy_non_empty_values(self):
        assert extract_field_value({"count": 0}, ["count"]) == 0

    def test_field_value_absent_is_none(self):
        assert extract_field_value({}, ["name"]) is None
        assert extract_field_value(None, ["name"]) is None

    def test_array_field_splits_strings_on_commas(self):
        assert extract_array_field({"skills": "Python, Go ,, SQL"}, ["skills"]) == ["Python", "Go", "SQL"]

    def test_array_field_prefers_lists_over_strings(self):
        record = {"years_of_experience": "5 years", "experience": [{"company": "Acme"}]}
        fields = ["years_of_experience", "experience"]

        assert extract_array_field(record, fields) == [{"company": "Acme"}]

    def test_array_field_non_sequence_is_empty(self):
        assert extract_array_field({"skills": 42}, ["skills"]) == []
        assert extract_array_field({}, ["skills"]) == []
