"""Tests for the high-level snapshot entry points."""

import json
from unittest.mock import Mock, patch

import pytest

from anchorsnap import __version__
from anchorsnap.api import build_snapshot, configure_logging, registry_for_schema, run_snapshot
from anchorsnap.common.exceptions import AnchorSnapError, ErrorCode, SchemaError
from anchorsnap.protocols import SnapshotWriter
from anchorsnap.settings import DecodingSettings, OutputSettings
from anchorsnap.settings.main import _Settings
from anchorsnap.snapshot import StaticAccountSource


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def schema_file(tmp_path, widget_idl):
    path = tmp_path / "widgets.json"
    path.write_text(json.dumps(widget_idl), encoding="utf-8")
    return path


class TestBuildSnapshot:

    def test_from_schema_text(self, widget_idl, widget_blob, gadget_blob):
        result = build_snapshot(json.dumps(widget_idl), [("w", widget_blob()), ("g", gadget_blob)])

        assert result.snapshot.account_type_counts() == {"Widget": 1, "Gadget": 1}
        assert result.snapshot["g"].data == {"count": 3}

    def test_invalid_schema_fails_before_decoding(self):
        def accounts():
            raise AssertionError("accounts consumed before the schema was validated")
            yield

        with pytest.raises(SchemaError):
            build_snapshot("{}", accounts())

    def test_strict_trailing_bytes(self, widget_schema, widget_blob):
        result = build_snapshot(widget_schema, [("w", widget_blob() + b"\x00")], strict_trailing_bytes=True)

        assert result.failures[0].error_name == "DECODE_FIELD_MISMATCH"

    def test_registry_for_schema(self, widget_schema):
        assert registry_for_schema(widget_schema).names() == ["Widget", "Gadget"]


class TestRunSnapshot:
    """Test the settings-driven run."""

    def test_writes_configured_output(self, tmp_path, schema_file, widget_blob, gadget_blob):
        settings = _Settings(
            program_id="prog",
            schema_path=schema_file,
            decoding=DecodingSettings(allowed_account_types="Widget"),
            output=OutputSettings(snapshot_path=tmp_path / "out" / "snapshot.json"),
        )
        source = StaticAccountSource({"w": widget_blob(), "g": gadget_blob})

        result = run_snapshot(source, settings=settings)

        document = json.loads((tmp_path / "out" / "snapshot.json").read_text(encoding="utf-8"))
        assert list(document) == ["w"]
        assert document["w"]["account_type"] == "Widget"
        assert result.stats.filtered == 1

    def test_custom_writer(self, schema_file, widget_blob):
        writer = Mock(spec=SnapshotWriter)
        settings = _Settings(schema_path=schema_file)

        result = run_snapshot(StaticAccountSource({"w": widget_blob()}), settings=settings, writer=writer)

        writer.write.assert_called_once_with(result.snapshot)

    def test_missing_schema_path(self):
        with pytest.raises(AnchorSnapError) as exc_info:
            run_snapshot(StaticAccountSource({}), settings=_Settings())

        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID
        assert exc_info.value.details["config_key"] == "schema_path"

    def test_unreadable_schema_file(self, tmp_path):
        settings = _Settings(schema_path=tmp_path / "missing.json")

        with pytest.raises(AnchorSnapError) as exc_info:
            run_snapshot(StaticAccountSource({}), settings=settings)

        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_setup_logs_applies_logging_settings(self, schema_file, widget_blob):
        settings = _Settings(schema_path=schema_file, log_level="debug", log_json=False)

        with patch("anchorsnap.api.snapshot.setup_logging") as setup_logging:
            run_snapshot(StaticAccountSource({"w": widget_blob()}), settings=settings, writer=Mock(spec=SnapshotWriter))

        setup_logging.assert_called_once_with("DEBUG", json_format=False)

    def test_logging_left_alone_by_default(self, schema_file, widget_blob):
        settings = _Settings(schema_path=schema_file)

        with patch("anchorsnap.api.snapshot.setup_logging") as setup_logging:
            run_snapshot(StaticAccountSource({"w": widget_blob()}), settings=settings, writer=Mock(spec=SnapshotWriter))

        setup_logging.assert_not_called()


def test_configure_logging_uses_settings():
    with patch("anchorsnap.api.snapshot.setup_logging") as setup_logging:
        configure_logging(_Settings(log_level="warning"))

    setup_logging.assert_called_once_with("WARNING", json_format=True)


def test_version_is_exposed():
    assert isinstance(__version__, str)
