import pytest

from field_types.rules import Rule, ValidationRules, first_error, first_failure, is_empty, is_falsy, iter_failures


@pytest.mark.unit
class TestIsEmpty:

    @pytest.mark.parametrize("value", [None, "", False, [], {}, (), float("nan")])
    def test_empty_values(self, value):
        """Test values that count as empty."""
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", [0, 0.0, " ", "0", [0], True])
    def test_non_empty_values(self, value):
        """Test that zero and whitespace are real values."""
        assert is_empty(value) is False

    @pytest.mark.parametrize("value", [0, 0.0, None, "", False, []])
    def test_falsy_values(self, value):
        """Test values a required field rejects."""
        assert is_falsy(value) is True

    @pytest.mark.parametrize("value", ["0", " ", 1, -1, 0.5, True])
    def test_non_falsy_values(self, value):
        assert is_falsy(value) is False


@pytest.mark.unit
class TestIterFailures:

    def test_required_empty_stops_evaluation(self):
        """Test that a missing required value only reports required."""
        failures = list(iter_failures("Title", "email", True, {"min_length": 5}, ""))

        assert [f.rule for f in failures] == [Rule.REQUIRED]
        assert failures[0].message == "Title is required"

    def test_optional_empty_is_valid(self):
        """Test that an empty optional value skips every other rule."""
        rules = ValidationRules(min_length=5, pattern=r"^\d+$")

        assert list(iter_failures("Code", "email", False, rules, None)) == []

    def test_required_zero_is_missing(self):
        """Test that a required field rejects 0 like any other falsy value."""
        failures = list(iter_failures("Qty", "number", True, {"min": 1}, 0))

        assert [f.message for f in failures] == ["Qty is required"]

    def test_optional_zero_is_checked_against_min(self):
        """Test that an optional 0 is a value, not an empty field."""
        failures = list(iter_failures("Count", "number", False, {"min": 1}, 0))

        assert [f.message for f in failures] == ["Count must be at least 1"]

    def test_required_string_zero_is_a_value(self):
        assert first_failure("Code", "text", True, None, "0") is None

    def test_length_rules(self):
        """Test min and max length messages."""
        short = first_failure("Title", "text", False, {"min_length": 3}, "ab")
        long = first_failure("Title", "text", False, {"max_length": 3}, "abcd")

        assert short.message == "Title must be at least 3 characters"
        assert long.message == "Title must be no more than 3 characters"

    def test_numeric_strings_are_compared_as_numbers(self):
        """Test min/max against number-like strings."""
        failure = first_failure("Age", "number", False, {"max": 10}, "12")

        assert failure.rule is Rule.MAX
        assert failure.message == "Age must be no more than 10"

    def test_fractional_limit_is_kept(self):
        failure = first_failure("Price", "decimal", False, {"min": 0.5}, 0.25)

        assert failure.message == "Price must be at least 0.5"

    def test_pattern_with_custom_message(self):
        """Test that a pattern message replaces the default."""
        rules = {"pattern": r"^[A-Z]{3}$", "pattern_message": "Use three capitals"}

        assert first_failure("Code", "text", False, rules, "abc").message == "Use three capitals"
        assert first_failure("Code", "text", False, {"pattern": r"^\d+$"}, "x").message == "Code format is invalid"

    def test_values_outside_options_are_not_rejected(self):
        """Test that declared options add no rule of their own."""
        assert first_failure("Priority", "select", False, None, "critical") is None

    def test_email_format(self):
        """Test the email format rule."""
        assert first_failure("Email", "email", False, None, "not-an-email").message == "Email must be a valid email"
        assert first_failure("Email", "email", False, None, "jane@example.com") is None
        assert first_failure("Email", "email", False, None, "jane@example.com\n").rule is Rule.EMAIL

    def test_url_format(self):
        """Test the url format rule."""
        assert first_failure("Website", "url", False, None, "nope").message == "Website must be a valid URL"
        assert first_failure("Website", "url", False, None, "https://example.com/a") is None

    def test_server_collects_all_failures_in_order(self):
        """Test that every failure after the empty checks is reported, in rule order."""
        rules = {"min_length": 20, "pattern": r"^\d+$"}

        failures = list(iter_failures("Email", "email", True, rules, "abc"))

        assert [f.rule for f in failures] == [Rule.MIN_LENGTH, Rule.PATTERN, Rule.EMAIL]

    def test_unknown_type_validates_as_text(self):
        assert first_failure("Thing", "made_up", True, None, "x") is None


@pytest.mark.unit
class TestFirstError:

    def test_uses_label_from_config(self):
        """Test the client helper reads the controller field config."""
        config = {"name": "title", "type": "text", "label": "Title", "required": True, "validation": {}}

        assert first_error(config, "") == "Title is required"

    def test_falls_back_to_name(self):
        config = {"name": "code", "validation": {"max_length": 2}}

        assert first_error(config, "abc") == "code must be no more than 2 characters"

    def test_valid_value(self):
        assert first_error({"name": "n", "type": "number", "validation": {"min": 1}}, 3) is None


@pytest.mark.unit
class TestValidationRules:

    def test_to_dict_drops_unset_rules(self):
        rules = ValidationRules(max_length=120)

        assert rules.to_dict() == {"max_length": 120}
