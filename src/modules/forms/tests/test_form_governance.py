"""Tests for form governance: save-time rules and change detection."""

from __future__ import annotations

import pytest

from src.exceptions import ValidationException
from src.models.enums import FieldType
from src.modules.forms.governance import FormGovernanceService
from src.modules.forms.schemas import FieldDefinition


@pytest.fixture
def governance():
    return FormGovernanceService()


def _messages(exc_info) -> list[str]:
    return [d["message"] for d in exc_info.value.details]


class TestValidateForm:
    def test_valid_form_passes(self, governance) -> None:
        governance.validate_form(
            "Seller form",
            [
                FieldDefinition(field_id="shop", label="Shop"),
                FieldDefinition(field_id="size", field_type=FieldType.DROPDOWN, options=["S", "M"]),
                FieldDefinition(field_id="country", field_type=FieldType.DROPDOWN, mapping="country"),
            ],
        )

    def test_blank_name_and_no_fields(self, governance) -> None:
        with pytest.raises(ValidationException) as exc_info:
            governance.validate_form("  ", [])

        fields = {d["field"] for d in exc_info.value.details}
        assert fields == {"form_name", "fields"}

    def test_duplicate_field_ids(self, governance) -> None:
        with pytest.raises(ValidationException) as exc_info:
            governance.validate_form(
                "Form", [FieldDefinition(field_id="a"), FieldDefinition(field_id="a")]
            )

        assert "Duplicate field_id 'a'" in _messages(exc_info)

    @pytest.mark.parametrize(
        "field_type", [FieldType.RADIO, FieldType.CHECKBOX, FieldType.DROPDOWN, FieldType.VARIANT]
    )
    def test_option_types_need_options(self, governance, field_type) -> None:
        with pytest.raises(ValidationException) as exc_info:
            governance.validate_form("Form", [FieldDefinition(field_id="pick", field_type=field_type)])

        assert exc_info.value.details[0]["field"] == "fields.0.options"

    def test_unknown_mapping(self, governance) -> None:
        with pytest.raises(ValidationException) as exc_info:
            governance.validate_form(
                "Form", [FieldDefinition(field_id="city", field_type=FieldType.DROPDOWN, mapping="city")]
            )

        assert "Unknown lookup table 'city'" in _messages(exc_info)

    def test_mapping_excludes_static_options(self, governance) -> None:
        with pytest.raises(ValidationException) as exc_info:
            governance.validate_form(
                "Form",
                [
                    FieldDefinition(
                        field_id="country", field_type=FieldType.DROPDOWN, mapping="country", options=["India"]
                    )
                ],
            )

        assert exc_info.value.details[0]["field"] == "fields.0.options"

    def test_min_above_max(self, governance) -> None:
        with pytest.raises(ValidationException) as exc_info:
            governance.validate_form(
                "Form", [FieldDefinition(field_id="qty", field_type=FieldType.NUMBER, min=10, max=1)]
            )

        assert "min must not exceed max" in _messages(exc_info)

    def test_size_limit(self, governance, monkeypatch) -> None:
        from src.config import settings

        monkeypatch.setattr(settings, "max_form_schema_bytes", 200)
        fields = [FieldDefinition(field_id=f"field_{i}", label="x" * 50) for i in range(5)]

        with pytest.raises(ValidationException, match="maximum size"):
            governance.validate_form("Form", fields)


class TestDetectFieldChanges:
    def test_first_save_has_no_changes(self, governance) -> None:
        assert governance.detect_field_changes(None, [FieldDefinition(field_id="a")]) == []

    def test_removed_and_retyped(self, governance) -> None:
        old = [
            FieldDefinition(field_id="a"),
            FieldDefinition(field_id="b", field_type=FieldType.TEXT),
            FieldDefinition(field_id="c"),
        ]
        new = [
            FieldDefinition(field_id="b", field_type=FieldType.NUMBER),
            FieldDefinition(field_id="c", label="Renamed"),
        ]

        changes = governance.detect_field_changes(old, new)

        assert changes == [
            {"field": "a", "reason": "Field removed"},
            {"field": "b", "reason": "Type changed from 'text' to 'number'"},
        ]
