"""Tests for the per-context compatibility evaluation."""

import json

import pytest

from compatgate.kernel.context import CheckingContext
from compatgate.kernel.errors import RemoteError
from compatgate.kernel.evaluator import evaluate_compatibility
from compatgate.kernel.lazy import LazyValue
from compatgate.kernel.resolver import ParsingNamespace, resolve_schema
from compatgate._internal.io.schema_files import read_schema_file


def _resolved_context(write_schema, namespace):
    schema_file = read_schema_file(write_schema("Foo"))
    context = CheckingContext(schema_file, "com.example.Foo")
    context.set_schema(resolve_schema(schema_file, "com.example.Foo", namespace))
    return context


def test_no_subjects_means_no_calls(write_schema, fake_registry):
    namespace = ParsingNamespace()
    context = _resolved_context(write_schema, namespace)
    client = LazyValue(lambda: fake_registry([]))

    evaluate_compatibility(context, client, namespace)

    assert context.results == []
    assert client.resolved is False


def test_one_result_per_subject_in_order(write_schema, fake_registry):
    namespace = ParsingNamespace()
    context = _resolved_context(write_schema, namespace)
    context.add_matching_subjects(["a-com.example.Foo-value", "b-com.example.Foo-value"])
    registry = fake_registry([], verdicts={"b-com.example.Foo-value": False})

    evaluate_compatibility(context, LazyValue(lambda: registry), namespace)

    assert [(r.subject_name, r.compatible) for r in context.results] == [
        ("a-com.example.Foo-value", True),
        ("b-com.example.Foo-value", False),
    ]
    assert [call[0] for call in registry.compatibility_calls] == [
        "a-com.example.Foo-value",
        "b-com.example.Foo-value",
    ]
    sent = json.loads(registry.compatibility_calls[0][1])
    assert sent["type"] == "record"
    assert context.incompatible_results()[0].schema is context.schema


def test_schema_set_only_once(write_schema):
    namespace = ParsingNamespace()
    context = _resolved_context(write_schema, namespace)
    with pytest.raises(RuntimeError):
        context.set_schema({"type": "record"})


def test_matching_subjects_set_only_once(write_schema):
    context = _resolved_context(write_schema, ParsingNamespace())
    context.add_matching_subjects([])
    with pytest.raises(RuntimeError):
        context.add_matching_subjects(["a-com.example.Foo-value"])
    assert context.matching_subjects == []


def test_remote_error_propagates(write_schema):
    namespace = ParsingNamespace()
    context = _resolved_context(write_schema, namespace)
    context.add_matching_subjects(["a-com.example.Foo-value", "b-com.example.Foo-value"])

    class FailingRegistry:
        def list_all_subjects(self):
            return []

        def test_compatibility(self, subject_name, schema_json):
            raise RemoteError("Compatibility check failed", ConnectionError("refused"))

    with pytest.raises(RemoteError):
        evaluate_compatibility(context, LazyValue(FailingRegistry), namespace)
    assert context.results == []
