"""Tests for template substitution"""
import pytest

from notify_core.engine.template_engine import find_tokens, substitute_template


def resolve_known(ref_step, data_name):
    values = {
        ("s1", "name"): "Bob",
        ("step_a", "step_status"): "pending",
        (None, "recipient_firstname"): "April",
        ("s1", "amount"): 1200,
    }
    return values.get((ref_step, data_name))


class TestSubstituteTemplate:

    def test_replaces_token(self):
        assert substitute_template("Hello {{s1:name}} world", resolve_known) == "Hello Bob world"

    def test_null_template(self):
        assert substitute_template(None, resolve_known) is None

    def test_empty_template(self):
        assert substitute_template("", resolve_known) == ""

    def test_null_resolver_returns_template(self):
        assert substitute_template("x", None) == "x"
        assert substitute_template("Hi {{s1:name}}", None) == "Hi {{s1:name}}"

    @pytest.mark.parametrize("text", [
        "plain text",
        "braces { but } no tokens",
        "single {s1:name} braces",
        "unterminated {{s1:name",
        "",
    ])
    def test_identity_without_tokens(self, text):
        calls = []

        def resolver(ref_step, data_name):
            calls.append((ref_step, data_name))
            return "X"

        assert substitute_template(text, resolver) == text
        assert calls == []

    def test_unresolved_token_left_verbatim(self):
        text = "Status: {{step_a:step_status}}, owner: {{step_a:owner}}"

        assert substitute_template(text, resolve_known) == "Status: pending, owner: {{step_a:owner}}"

    def test_empty_string_value_replaces_token(self):
        assert substitute_template("[{{s1:name}}]", lambda ref_step, data_name: "") == "[]"

    def test_non_text_value_rendered_as_text(self):
        assert substitute_template("Amount {{s1:amount}}", resolve_known) == "Amount 1200"

    def test_simple_token_has_no_step(self):
        assert substitute_template("Dear {{recipient_firstname}},", resolve_known) == "Dear April,"

    def test_parts_are_trimmed(self):
        assert substitute_template("{{ s1 : name }}", resolve_known) == "Bob"

    @pytest.mark.parametrize("token", ["{{:name}}", "{{s1:}}", "{{ }}", "{{ : }}"])
    def test_ill_formed_tokens_untouched(self, token):
        assert substitute_template(f"a {token} b", lambda ref_step, data_name: "X") == f"a {token} b"

    def test_data_name_keeps_later_colons(self):
        calls = []

        def resolver(ref_step, data_name):
            calls.append((ref_step, data_name))
            return "X"

        assert substitute_template("{{a:b:c}}", resolver) == "X"
        assert calls == [("a", "b:c")]

    def test_opening_brace_inside_token_is_not_a_token(self):
        calls = []

        def resolver(ref_step, data_name):
            calls.append((ref_step, data_name))
            return "X"

        assert substitute_template("{{a{b:c}}", resolver) == "{{a{b:c}}"
        assert calls == []

    def test_extra_outer_braces_are_kept(self):
        assert substitute_template("{{{s1:name}}}", resolve_known) == "{Bob}"

    def test_every_occurrence_replaced(self):
        assert substitute_template("{{s1:name}} and {{s1:name}}", resolve_known) == "Bob and Bob"

    def test_replacement_not_rescanned(self):
        resolver = lambda ref_step, data_name: "{{s1:name}}" if data_name == "nested" else "Bob"

        assert substitute_template("{{s1:nested}}", resolver) == "{{s1:name}}"

    def test_resolver_errors_propagate(self):
        def failing(ref_step, data_name):
            raise RuntimeError("lookup failed")

        with pytest.raises(RuntimeError):
            substitute_template("{{s1:name}}", failing)


class TestFindTokens:

    def test_tokens_in_order(self):
        tokens = find_tokens("{{s1:name}} {{bad:}} {{task_link}}")

        assert [(t.ref_step, t.data_name) for t in tokens] == [("s1", "name"), (None, "task_link")]
        assert tokens[0].raw == "{{s1:name}}"

    def test_no_template(self):
        assert find_tokens(None) == []
