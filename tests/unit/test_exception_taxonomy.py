"""Tests for the exception taxonomy.

Validates:
- RangeMapError hierarchy and structured attributes
- Category classification (validation, transient, permanent, contract)
- ``to_error_dict()`` produces stable payload keys
- Import-layer exceptions carry default stage and code
"""

from __future__ import annotations

from typing import ClassVar

from range_maps.core.config import ConfigValidationError
from range_maps.core.exceptions import (
    ArgumentValidationError,
    ContractError,
    EmptyRangeMapError,
    PermanentError,
    RangeMapError,
    SourceError,
    StoreError,
    TransientError,
    ValidationError,
)


class TestRangeMapErrorBase:
    """RangeMapError base class behavior."""

    def test_default_attributes(self) -> None:
        err = RangeMapError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert err.correlation_id == ""

    def test_custom_attributes(self) -> None:
        err = RangeMapError(
            "fail",
            stage="download",
            code="DOWNLOAD_FAILED",
            retryable=True,
            correlation_id="chelonia-mydas",
        )
        assert err.stage == "download"
        assert err.code == "DOWNLOAD_FAILED"
        assert err.retryable is True
        assert err.correlation_id == "chelonia-mydas"

    def test_str_is_message(self) -> None:
        assert str(RangeMapError("human-readable error")) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        err = RangeMapError("x", stage="s", code="C", retryable=True, correlation_id="id")
        d = err.to_error_dict()
        assert set(d.keys()) == {
            "category",
            "code",
            "stage",
            "message",
            "retryable",
            "correlation_id",
        }
        assert d["message"] == "x"
        assert d["retryable"] is True


class TestCategoryBases:
    """Category base classes set correct defaults."""

    def test_validation_error_not_retryable(self) -> None:
        err = ValidationError("bad input")
        assert err.retryable is False
        assert err.category == "validation"

    def test_transient_error_retryable(self) -> None:
        err = TransientError("timeout")
        assert err.retryable is True
        assert err.category == "transient"

    def test_permanent_error_not_retryable(self) -> None:
        err = PermanentError("gone")
        assert err.retryable is False
        assert err.category == "permanent"

    def test_contract_error_not_retryable(self) -> None:
        err = ContractError("schema drift")
        assert err.retryable is False
        assert err.category == "contract"

    def test_dynamic_category_from_retryable(self) -> None:
        assert RangeMapError("x", retryable=True).category == "transient"
        assert RangeMapError("x", retryable=False).category == "permanent"


class TestAllExceptionsAreRangeMapError:
    """Every custom exception inherits from RangeMapError."""

    EXCEPTION_CLASSES: ClassVar[list[type[RangeMapError]]] = [
        ArgumentValidationError,
        ConfigValidationError,
        SourceError,
        StoreError,
        EmptyRangeMapError,
    ]

    def test_all_subclass_range_map_error(self) -> None:
        for cls in self.EXCEPTION_CLASSES:
            assert issubclass(cls, RangeMapError), f"{cls.__name__} is not a RangeMapError"


class TestImportExceptionStageAndCode:
    """Import-layer exceptions have a default stage and code."""

    def test_source_error(self) -> None:
        err = SourceError("blob 404", correlation_id="folder/a.kml")
        assert err.stage == "download"
        assert err.code == "RANGE_MAP_DOWNLOAD_FAILED"
        assert err.category == "transient"
        assert err.correlation_id == "folder/a.kml"

    def test_store_error(self) -> None:
        err = StoreError("blob 403")
        assert err.stage == "store"
        assert err.code == "RANGE_MAP_STORE_FAILED"
        assert err.retryable is True

    def test_empty_range_map_error(self) -> None:
        err = EmptyRangeMapError("no features")
        assert err.stage == "convert"
        assert err.code == "RANGE_MAP_EMPTY"
        assert err.category == "permanent"

    def test_config_validation_error(self) -> None:
        err = ConfigValidationError("RANGE_MAP_MAX_FOLDERS", 0, "must be > 0")
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.key == "RANGE_MAP_MAX_FOLDERS"
        assert err.value == 0
        assert "RANGE_MAP_MAX_FOLDERS" in err.message

    def test_argument_validation_error(self) -> None:
        err = ArgumentValidationError("source", "", "must not be empty")
        assert isinstance(err, ValueError)
        assert isinstance(err, ValidationError)
        assert err.stage == "convert"
        assert err.code == "INVALID_ARGUMENT"
        assert err.category == "validation"
        assert err.retryable is False
        assert err.argument == "source"
        assert err.message == "source='': must not be empty"
        assert str(err) == err.message
