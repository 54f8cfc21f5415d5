"""Tests for wren.extraction — form data into record types."""

from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from wren.errors import BindingError, ConfigurationError
from wren.extraction import extract_record, is_record_type, record_fields
from wren.http.forms import FormData
from wren.http.request import Request


@dataclass(frozen=True, slots=True)
class Person:
    name: str
    age: int = 0
    active: bool = False
    score: float | None = None


class Human:
    firstName: str
    lastName: str
    kind: ClassVar[str] = "human"
    _secret: str


class NeedsArgs:
    name: str

    def __init__(self, name: str) -> None:
        self.name = name


@dataclass
class Tagged:
    tags: list[str] = field(default_factory=list)


class TestIsRecordType:
    def test_dataclass(self) -> None:
        assert is_record_type(Person) is True

    def test_plain_annotated_class(self) -> None:
        assert is_record_type(Human) is True

    def test_builtins_are_not_records(self) -> None:
        for annotation in (str, int, dict, list):
            assert is_record_type(annotation) is False

    def test_wren_types_are_not_records(self) -> None:
        assert is_record_type(Request) is False
        assert is_record_type(FormData) is False

    def test_non_types(self) -> None:
        assert is_record_type("Person") is False
        assert is_record_type(list[int]) is False


class TestRecordFields:
    def test_dataclass_fields(self) -> None:
        assert record_fields(Person) == {"name": str, "age": int, "active": bool, "score": float}

    def test_plain_class_skips_private_and_classvars(self) -> None:
        assert record_fields(Human) == {"firstName": str, "lastName": str}

    def test_unsupported_field_type(self) -> None:
        with pytest.raises(ConfigurationError, match="tags"):
            record_fields(Tagged)

    def test_plain_class_needs_no_arg_constructor(self) -> None:
        with pytest.raises(ConfigurationError, match="NeedsArgs"):
            record_fields(NeedsArgs)


class TestExtractRecord:
    def test_dataclass_with_conversion(self) -> None:
        person = extract_record(Person, {"name": "John", "age": "42", "active": "on"})
        assert person == Person(name="John", age=42, active=True)

    def test_optional_field(self) -> None:
        person = extract_record(Person, {"name": "Ann", "score": "9.5"})
        assert person.score == 9.5

    def test_unmatched_keys_ignored(self) -> None:
        person = extract_record(Person, {"name": "John", "nickname": "JD"})
        assert person == Person(name="John")

    def test_missing_keys_keep_defaults(self) -> None:
        person = extract_record(Person, {"name": "John"})
        assert person.age == 0
        assert person.active is False

    def test_missing_required_field(self) -> None:
        with pytest.raises(BindingError, match="name"):
            extract_record(Person, {"age": "3"})

    def test_bad_value(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            extract_record(Person, {"name": "John", "age": "old"})
        assert exc_info.value.status == 400

    def test_plain_class(self) -> None:
        human = extract_record(Human, FormData("firstName=John&lastName=Doe&_secret=x"))
        assert human.firstName == "John"
        assert human.lastName == "Doe"
        assert not hasattr(human, "_secret")

    def test_plain_class_missing_key_stays_unset(self) -> None:
        human = extract_record(Human, {"firstName": "John"})
        assert human.firstName == "John"
        assert not hasattr(human, "lastName")
