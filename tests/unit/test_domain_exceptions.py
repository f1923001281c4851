"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from fireview.domain.entities import ConnectionConfig
from fireview.domain.exceptions import (
    ConfigException,
    FireviewException,
    ImportShapeException,
    NotConnectedException,
    OperationInProgressException,
    ResourceNotFoundException,
    StoreException,
    ValidationException,
)


def test_fireview_exception_default_error_code() -> None:
    """Base FireviewException uses class name as error_code when not provided."""
    exc = FireviewException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "FireviewException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = ValidationException("Project ID cannot be empty.", field="project_id")
    assert exc.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "Project ID cannot be empty.",
        "details": {"field": "project_id"},
    }


def test_config_exception_names_missing_fields() -> None:
    exc = ConfigException(["api_key", "app_id"])
    assert exc.error_code == "CONFIG_ERROR"
    assert "api_key, app_id" in exc.message
    assert exc.details == {"missing_fields": ["api_key", "app_id"]}


def test_operation_in_progress_mentions_document() -> None:
    exc = OperationInProgressException("update", "doc-1")
    assert exc.error_code == "OPERATION_IN_PROGRESS"
    assert "doc-1" in exc.message
    assert exc.details == {"operation": "update", "document_id": "doc-1"}


def test_misc_codes() -> None:
    assert NotConnectedException().error_code == "NOT_CONNECTED"
    assert ImportShapeException(2).details == {"index": 2}
    assert ResourceNotFoundException("document", "users/x").details["resource_id"] == "users/x"
    assert StoreException("boom", status_code=500).details == {"status_code": 500}


class TestConnectionConfig:
    """Whole-config validation on construction."""

    def test_missing_fields_listed(self) -> None:
        with pytest.raises(ConfigException) as exc_info:
            ConnectionConfig("demo", "", "d", "", "s", "a")
        assert exc_info.value.details["missing_fields"] == ["api_key", "storage_bucket"]

    def test_from_settings_rejects_blank_project(self, settings) -> None:
        with pytest.raises(ValidationException):
            ConnectionConfig.from_settings("   ", settings)

    def test_public_dict_has_no_api_key(self, settings) -> None:
        config = ConnectionConfig.from_settings(" demo ", settings)
        assert config.project_id == "demo"
        assert "api_key" not in config.public_dict()
