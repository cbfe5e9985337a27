# tests/unit/engine/test_callback.py
"""Tests for the platform callback harness."""

from __future__ import annotations

import pytest

from flowschema.contracts.enums import OutputField
from flowschema.core.config import FlowSchemaSettings
from flowschema.engine.callback import apply_result, handle_callback, select_payload
from flowschema.engine.orchestrator import Orchestrator
from tests.fixtures.processes import api_process, make_payload


class TestSelectPayload:
    """Tests for select_payload function."""

    def test_top_level(self) -> None:
        data = make_payload("ai_node", api_process())

        assert select_payload(data) is data

    def test_nested_data_with_process(self) -> None:
        inner = make_payload("ai_node", api_process())
        data = {"data": inner, "other": 1}

        assert select_payload(data) is inner

    def test_nested_data_without_process_ignored(self) -> None:
        data = {"data": {"aiNodeId": "ai_node"}, "process": api_process()}

        assert select_payload(data) is data

    def test_nested_data_not_object_ignored(self) -> None:
        data = {"data": "text"}

        assert select_payload(data) is data


class TestHandleCallback:
    """End-to-end callback behaviour."""

    def test_success_writes_meta_and_structured_output(self) -> None:
        data = make_payload("ai_node", api_process(), content={"text": "hello"})

        returned = handle_callback(data)

        assert returned is data
        assert data["meta"] == {
            "ai_node_id": "ai_node",
            "next_node_id": "api_node",
            "next_node_title": "API Call",
            "vars": ["userId"],
            "vars_count": 1,
            "include_url_vars": False,
        }
        rsp = data["structured_output_rsp"]
        assert rsp["status"] == "ok"
        assert rsp["schema"]["required"] == ["userId"]
        assert rsp["schema"]["additionalProperties"] is False
        assert data["content"] == {"text": "hello"}
        assert "error" not in data

    def test_include_url_vars_from_payload(self) -> None:
        data = make_payload("ai_node", api_process(), includeUrlVars=True)

        handle_callback(data)

        assert data["meta"]["vars"] == ["token", "userId"]
        assert data["meta"]["include_url_vars"] is True

    def test_non_bool_include_url_vars_ignored(self) -> None:
        data = make_payload("ai_node", api_process(), includeUrlVars="yes")

        handle_callback(data, FlowSchemaSettings(include_url_vars=False))

        assert data["meta"]["vars"] == ["userId"]

    def test_nested_inputs_augmented_in_place(self) -> None:
        inner = make_payload("ai_node", api_process())
        data = {"data": inner}

        handle_callback(data)

        assert "meta" in inner
        assert "structured_output_rsp" in inner
        assert "meta" not in data

    def test_nested_include_url_vars(self) -> None:
        inner = make_payload("ai_node", api_process(), includeUrlVars=True)
        data = {"data": inner, "includeUrlVars": False}

        handle_callback(data)

        assert inner["meta"]["vars"] == ["token", "userId"]

    def test_error_written_without_meta(self) -> None:
        data = make_payload(None, api_process())

        handle_callback(data)

        assert data["error"] == {"code": "BAD_INPUT", "message": "aiNodeId is required"}
        assert "meta" not in data
        assert "structured_output_rsp" not in data

    def test_missing_process(self) -> None:
        data = make_payload("ai_node", None)

        handle_callback(data)

        assert data["error"]["code"] == "BAD_INPUT"
        assert data["error"]["message"] == "process is required"

    def test_ai_node_not_found(self) -> None:
        data = make_payload("nope", api_process())

        handle_callback(data)

        assert data["error"] == {"code": "AI_NODE_NOT_FOUND", "message": "AI node not found by id: nope"}

    def test_stale_error_cleared_on_success(self) -> None:
        data = make_payload("ai_node", api_process(), error={"code": "OLD", "message": "previous run"})

        handle_callback(data)

        assert "error" not in data

    def test_unknown_fields_preserved(self) -> None:
        data = make_payload("ai_node", api_process(), task_id="t-1", extra={"k": [1, 2]})

        handle_callback(data)

        assert data["task_id"] == "t-1"
        assert data["extra"] == {"k": [1, 2]}

    def test_schema_output_field(self) -> None:
        data = make_payload("ai_node", api_process(), structured_output_rsp={"status": "stale"})

        handle_callback(data, FlowSchemaSettings(output_field=OutputField.SCHEMA))

        assert data["schema"]["required"] == ["userId"]
        assert "structured_output_rsp" not in data

    def test_orchestrator_settings_take_precedence(self) -> None:
        data = make_payload("ai_node", api_process())
        orchestrator = Orchestrator(FlowSchemaSettings(output_field=OutputField.SCHEMA))

        handle_callback(data, FlowSchemaSettings(), orchestrator=orchestrator)

        assert "schema" in data

    def test_non_dict_rejected(self) -> None:
        with pytest.raises(TypeError, match="callback data must be a dict"):
            handle_callback(["not", "a", "dict"])  # type: ignore[arg-type]


class TestContentUnwrap:
    """Optional content.properties unwrapping."""

    def test_unwraps_when_enabled(self) -> None:
        data = make_payload("ai_node", api_process(), content={"properties": {"userId": "42"}, "type": "object"})

        handle_callback(data, FlowSchemaSettings(unwrap_content_properties=True))

        assert data["content"] == {"userId": "42"}

    def test_left_alone_when_disabled(self) -> None:
        content = {"properties": {"userId": "42"}}
        data = make_payload("ai_node", api_process(), content=content)

        handle_callback(data)

        assert data["content"] == content

    def test_non_object_properties_left_alone(self) -> None:
        data = make_payload("ai_node", api_process(), content={"properties": "x"})

        handle_callback(data, FlowSchemaSettings(unwrap_content_properties=True))

        assert data["content"] == {"properties": "x"}

    def test_not_applied_on_error(self) -> None:
        data = make_payload("nope", api_process(), content={"properties": {"a": 1}})

        handle_callback(data, FlowSchemaSettings(unwrap_content_properties=True))

        assert data["content"] == {"properties": {"a": 1}}


class TestApplyResult:
    def test_error_leaves_schema_fields_untouched(self) -> None:
        from flowschema.contracts.enums import ErrorCode
        from flowschema.contracts.errors import ErrorInfo
        from flowschema.engine.orchestrator import GenerationResult

        payload = {"schema": {"old": True}}
        result = GenerationResult.failure(ErrorInfo(code=ErrorCode.PROCESS_ERROR, message="boom"))

        apply_result(payload, result, FlowSchemaSettings())

        assert payload == {"schema": {"old": True}, "error": {"code": "PROCESS_ERROR", "message": "boom"}}
