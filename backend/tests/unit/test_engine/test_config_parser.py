"""Tests for the users configuration parsers"""
import json

import pytest

from notify_core.domain.errors import (
    ConfigurationError,
    InvalidInputError,
    InvalidJsonFormatError,
    StructuralValidationError,
)
from notify_core.domain.models import InvolvedUsersConfig
from notify_core.engine.config_parser import parse_involved_users, parse_users_config, validate_involved_users


def _config(**fields):
    document = {"stepManager": None, "stepUser": None, "memberShips": []}
    document.update(fields)
    return json.dumps(document)


class TestParseInvolvedUsers:

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_null_or_empty_input(self, text):
        with pytest.raises(InvalidInputError, match="cannot be null or empty"):
            parse_involved_users(text)

    def test_invalid_json(self):
        with pytest.raises(InvalidJsonFormatError, match="Invalid JSON format"):
            parse_involved_users("{ not json")

    def test_missing_step_manager_names_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_involved_users('{"stepUser":"s","memberShips":[]}')

        assert "stepManager" in exc_info.value.message
        assert "MISSING" in exc_info.value.message

    def test_missing_step_user_names_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_involved_users('{"stepManager":"m","memberShips":[]}')

        assert "stepUser" in exc_info.value.message
        assert "MISSING" in exc_info.value.message

    @pytest.mark.parametrize("value", [5, True, ["step_a"], {"ref": "step_a"}])
    def test_non_text_step_user(self, value):
        with pytest.raises(ConfigurationError, match="not a valid text value"):
            parse_involved_users(_config(stepUser=value))

    @pytest.mark.parametrize("document", [
        '{"stepManager":null,"stepUser":null}',
        '{"stepManager":null,"stepUser":null,"memberShips":"4$2"}',
        '{"stepManager":null,"stepUser":null,"memberShips":null}',
    ])
    def test_memberships_missing_or_not_array(self, document):
        with pytest.raises(ConfigurationError, match="missing or not a valid array"):
            parse_involved_users(document)

    def test_blank_memberships_dropped_in_order(self):
        config = parse_involved_users('{"stepManager":"m","stepUser":null,"memberShips":["a","","  ","b"]}')

        assert config.step_manager_ref == "m"
        assert config.step_user_ref is None
        assert config.memberships == ("a", "b")

    def test_non_text_memberships_dropped(self):
        config = parse_involved_users(_config(memberShips=["4$2", 7, None, "7$1"]))

        assert config.memberships == ("4$2", "7$1")

    def test_memberships_trimmed(self):
        config = parse_involved_users(_config(stepUser=" step_a ", memberShips=[" 4$2 ", "\t7$1"]))

        assert config.memberships == ("4$2", "7$1")
        assert config.step_user_ref == " step_a "

    def test_unknown_keys_ignored(self):
        config = parse_involved_users(_config(stepUser="step_a", extra={"any": "thing"}))

        assert config.step_user_ref == "step_a"

    def test_non_object_root(self):
        with pytest.raises(ConfigurationError):
            parse_involved_users('["stepManager"]')

    def test_equal_documents_give_equal_configs(self):
        text = _config(stepUser="step_a", memberShips=["4$2"])

        assert parse_involved_users(text) == parse_involved_users(text)

    def test_config_is_immutable(self):
        config = parse_involved_users(_config(stepUser="step_a"))

        with pytest.raises(Exception):
            config.step_user_ref = "step_b"


class TestValidateInvolvedUsers:

    def test_blank_membership_rejected(self):
        with pytest.raises(StructuralValidationError, match="empty"):
            validate_involved_users(_config(memberShips=["4$2", " "]))

    def test_non_string_membership_rejected(self):
        with pytest.raises(StructuralValidationError, match="membership reference"):
            validate_involved_users(_config(memberShips=[42]))

    def test_valid_document(self):
        config = validate_involved_users(_config(stepManager="step_a", memberShips=["4$2"]))

        assert config.step_manager_ref == "step_a"
        assert config.memberships == ("4$2",)


class TestParseUsersConfig:

    @pytest.mark.parametrize("text", [None, "", "{oops", '"users"', '{"other": {}}', '{"users": []}'])
    def test_degrades_to_empty(self, text):
        assert parse_users_config(text) == InvolvedUsersConfig.empty()

    def test_reads_users_node(self):
        config = parse_users_config(json.dumps({
            "users": {"stepManager": "step_a", "stepUser": " step_b ", "memberShips": ["4$2", ""]}
        }))

        assert config.step_manager_ref == "step_a"
        assert config.step_user_ref == "step_b"
        assert config.memberships == ("4$2",)

    def test_memberships_input_appended(self):
        config = parse_users_config(json.dumps({
            "users": {"memberShips": ["4$2"], "membersShipsInput": "step_a:group"}
        }))

        assert config.memberships == ("4$2", "step_a:group")
        assert config.step_user_ref is None

    def test_memberships_input_not_duplicated(self):
        config = parse_users_config(json.dumps({
            "users": {"memberShips": ["step_a:group"], "membersShipsInput": "step_a:group"}
        }))

        assert config.memberships == ("step_a:group",)
