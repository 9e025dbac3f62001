"""Tests for subject name matching."""

import pytest

from compatgate.kernel.errors import InvalidSubjectPatternError
from compatgate.kernel.subjects import (
    SubjectIndex,
    compile_subject_pattern,
    extract_full_type_name,
    match_subjects,
)

JAVA_PATTERN = r"^(?<topicname>.+)-(?<schematypefullname>.+)-value$"


@pytest.fixture
def pattern():
    return compile_subject_pattern(JAVA_PATTERN)


def test_java_named_groups_are_accepted(pattern):
    assert set(pattern.groupindex) == {"topicname", "schematypefullname"}


def test_python_named_groups_are_accepted():
    compiled = compile_subject_pattern(r"^(?P<schematypefullname>[^-]+)-value$")
    assert extract_full_type_name("com.example.Foo-value", compiled) == "com.example.Foo"


def test_lookbehind_is_not_rewritten():
    compiled = compile_subject_pattern(r"(?<=topic-)(?<schematypefullname>[\w.]+)")
    assert extract_full_type_name("topic-com.example.Foo", compiled) == "com.example.Foo"


def test_pattern_without_type_group_rejected():
    with pytest.raises(InvalidSubjectPatternError):
        compile_subject_pattern(r"^(?<topicname>.+)-value$")


def test_invalid_regex_rejected():
    with pytest.raises(InvalidSubjectPatternError):
        compile_subject_pattern(r"^(?<schematypefullname>.+")


def test_single_subject_match(pattern):
    assert match_subjects(["orders-com.example.Foo-value"], pattern, "com.example.Foo") == [
        "orders-com.example.Foo-value"
    ]


def test_other_type_gives_empty_match(pattern):
    assert match_subjects(["orders-com.example.Bar-value"], pattern, "com.example.Foo") == []


def test_subjects_grouped_in_registry_order(pattern):
    subjects = [
        "payments-com.example.Foo-value",
        "orders-com.example.Bar-value",
        "orders-com.example.Foo-value",
    ]
    index = SubjectIndex(subjects, pattern)

    assert index.subjects_for("com.example.Foo") == [
        "payments-com.example.Foo-value",
        "orders-com.example.Foo-value",
    ]
    assert index.type_names() == ["com.example.Bar", "com.example.Foo"]


def test_unmatched_subject_never_matches(pattern):
    subjects = ["orders-com.example.Foo-key", "orders-com.example.Foo-value"]
    index = SubjectIndex(subjects, pattern)

    assert index.unresolved == ["orders-com.example.Foo-key"]
    for type_name in index.type_names():
        assert "orders-com.example.Foo-key" not in index.subjects_for(type_name)


def test_unmatched_subject_is_logged(pattern, caplog):
    with caplog.at_level("WARNING"):
        SubjectIndex(["no-dashes"], pattern)
    assert "Unable to extract full type name from subject [no-dashes]" in caplog.text


def test_empty_optional_group_is_unresolved():
    compiled = compile_subject_pattern(r"^(?<topicname>\w+)(-(?<schematypefullname>[\w.]+))?$")
    index = SubjectIndex(["orders"], compiled)
    assert index.unresolved == ["orders"]
    assert index.type_names() == []


def test_matching_is_deterministic(pattern):
    subjects = ["a-com.example.Foo-value", "b-com.example.Foo-value", "c-x.Y-value", "junk"]
    first = match_subjects(subjects, pattern, "com.example.Foo")
    second = match_subjects(list(subjects), pattern, "com.example.Foo")
    assert first == second == ["a-com.example.Foo-value", "b-com.example.Foo-value"]
    assert match_subjects(subjects, pattern, "com.example.Missing") == []


def test_lookup_returns_copy(pattern):
    index = SubjectIndex(["orders-com.example.Foo-value"], pattern)
    index.subjects_for("com.example.Foo").append("mutated")
    assert index.subjects_for("com.example.Foo") == ["orders-com.example.Foo-value"]
