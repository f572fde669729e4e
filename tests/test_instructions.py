"""
Unit tests for modelfile.instructions module.

Tests construction, validation and equality of instruction variants.
"""

from __future__ import annotations

import dataclasses

import pytest

from modelfile.exceptions import ValidationError
from modelfile.instructions import (
    INSTRUCTION_TYPES,
    Adapter,
    Base,
    License,
    Message,
    MessageRole,
    Parameter,
    System,
    Template,
    parse_role,
)


class TestInstructionValues:
    """Tests for value semantics shared by all variants."""

    def test_structural_equality(self):
        """Instructions with equal fields are equal."""
        assert Base("llama3.2") == Base("llama3.2")
        assert Parameter("top_k", "20") == Parameter("top_k", "20")
        assert System("a") != System("b")

    def test_different_variants_are_not_equal(self):
        """Variants with the same text are different instructions."""
        assert Base("x") != Adapter("x")

    def test_instructions_are_immutable(self):
        """Instruction fields cannot be reassigned."""
        system = System("terse")
        with pytest.raises(dataclasses.FrozenInstanceError):
            system.prompt = "verbose"

    def test_instructions_are_hashable(self):
        """Instructions can be used in sets."""
        assert len({Base("x"), Base("x"), Template("t")}) == 2

    def test_keyword_lookup(self):
        """Every keyword maps to its variant."""
        assert INSTRUCTION_TYPES == {
            "FROM": Base,
            "PARAMETER": Parameter,
            "TEMPLATE": Template,
            "SYSTEM": System,
            "ADAPTER": Adapter,
            "LICENSE": License,
            "MESSAGE": Message,
        }


class TestInstructionValidation:
    """Tests for argument validation."""

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: Base(""),
            lambda: Template("   "),
            lambda: System("\n"),
            lambda: Adapter(""),
            lambda: License(""),
            lambda: Parameter("temperature", ""),
            lambda: Parameter("", "0.7"),
            lambda: Message("user", " "),
        ],
    )
    def test_empty_arguments_rejected(self, factory):
        """Empty or whitespace-only arguments raise ValidationError."""
        with pytest.raises(ValidationError, match="must not be empty"):
            factory()

    def test_non_string_argument_rejected(self):
        """Arguments must be strings."""
        with pytest.raises(ValidationError, match="must be a string"):
            Base(42)

    def test_block_marker_rejected(self):
        """Arguments may not contain the block marker."""
        with pytest.raises(ValidationError, match='"""'):
            System('say """hi"""')

    @pytest.mark.parametrize("value", ["a\r\nb", "line\r"])
    def test_carriage_return_rejected(self, value):
        """Arguments may not contain carriage returns."""
        with pytest.raises(ValidationError, match="carriage returns"):
            Template(value)

    def test_parameter_name_single_token(self):
        """Parameter names may not contain whitespace."""
        with pytest.raises(ValidationError, match="single token"):
            Parameter("top k", "20")

    def test_multiline_content_allowed(self):
        """Multi-line text is a valid argument."""
        template = Template("{{ .System }}\n{{ .Prompt }}")
        assert template.body.count("\n") == 1


class TestMessageRole:
    """Tests for message roles."""

    def test_role_string_coerced(self):
        """String roles are stored as MessageRole."""
        message = Message(role="user", content="hi")
        assert message.role is MessageRole.USER

    def test_role_case_insensitive(self):
        """Role names are matched case-insensitively."""
        assert Message("SYSTEM", "x") == Message(MessageRole.SYSTEM, "x")

    def test_invalid_role(self):
        """Unknown roles raise ValidationError naming the role."""
        with pytest.raises(ValidationError, match="Invalid message role 'bogus'"):
            Message(role="bogus", content="hello")

    def test_parse_role_lists_valid_roles(self):
        """The error lists the recognised roles."""
        with pytest.raises(ValidationError, match="system, user, assistant"):
            parse_role("tool")

    def test_parse_role_passthrough(self):
        """MessageRole values are returned unchanged."""
        assert parse_role(MessageRole.ASSISTANT) is MessageRole.ASSISTANT


class TestParameterTypedValue:
    """Tests for Parameter.typed_value."""

    def test_known_int_parameter(self):
        """Known integer parameters convert to int."""
        assert Parameter("num_ctx", "4096").typed_value() == 4096

    def test_known_float_parameter(self):
        """Known float parameters convert to float."""
        assert Parameter("temperature", "0.7").typed_value() == pytest.approx(0.7)

    def test_unknown_parameter_is_raw(self):
        """Unknown parameters keep their raw value."""
        assert Parameter("custom", "abc").typed_value() == "abc"

    def test_unconvertible_value_is_raw(self):
        """Values that do not convert keep their raw value."""
        assert Parameter("num_ctx", "lots").typed_value() == "lots"
