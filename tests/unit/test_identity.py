"""Unit tests for healthz.identity.provider."""
from __future__ import annotations

from pathlib import Path

import pytest

from healthz.identity.provider import (
    FileIdentityProvider,
    IdentityProvider,
    StaticIdentityProvider,
    ensure_identity,
    new_service_id,
)
from healthz.schema.errors import ErrorSeverity, IdentityError


@pytest.fixture()
def id_file(tmp_path: Path) -> Path:
    return tmp_path / "service-id"


class TestNewServiceId:
    def test_has_prefix(self) -> None:
        assert new_service_id("api").startswith("api")

    def test_has_no_separators(self) -> None:
        assert "-" not in new_service_id("api")

    def test_token_is_32_hex_chars(self) -> None:
        token = new_service_id("svc")[len("svc"):]
        assert len(token) == 32
        int(token, 16)

    def test_is_random(self) -> None:
        assert new_service_id() != new_service_id()


class TestFileIdentityProvider:
    def test_creates_absent_file(self, id_file: Path) -> None:
        service_id = FileIdentityProvider(id_file).ensure_identity()
        assert id_file.exists()
        assert id_file.read_text(encoding="utf-8") == service_id
        assert service_id.startswith("api")

    def test_empty_file_gets_new_identifier(self, id_file: Path) -> None:
        id_file.write_text("", encoding="utf-8")
        service_id = FileIdentityProvider(id_file).ensure_identity()
        assert service_id
        assert id_file.read_text(encoding="utf-8") == service_id

    def test_existing_content_is_returned_verbatim(self, id_file: Path) -> None:
        id_file.write_text("  not-a-uuid\n", encoding="utf-8")
        assert FileIdentityProvider(id_file).ensure_identity() == "  not-a-uuid\n"

    def test_non_utf8_content_is_not_fatal(self, id_file: Path) -> None:
        id_file.write_bytes(b"api\xff\xfe")
        service_id = FileIdentityProvider(id_file).ensure_identity()
        assert service_id == "api\ufffd\ufffd"
        assert id_file.read_bytes() == b"api\xff\xfe"

    def test_non_utf8_identity_is_stable(self, id_file: Path) -> None:
        id_file.write_bytes(b"\x80svc-1")
        first = FileIdentityProvider(id_file).ensure_identity()
        assert FileIdentityProvider(id_file).ensure_identity() == first

    def test_stable_across_calls(self, id_file: Path) -> None:
        first = FileIdentityProvider(id_file).ensure_identity()
        second = FileIdentityProvider(id_file).ensure_identity()
        assert first == second

    def test_custom_prefix(self, id_file: Path) -> None:
        assert FileIdentityProvider(id_file, prefix="worker").ensure_identity().startswith("worker")

    def test_creation_is_logged(self, id_file: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="healthz.identity.provider"):
            service_id = FileIdentityProvider(id_file).ensure_identity()
        assert f"New persistent service-id {service_id}" in caplog.text
        assert f"Use persistent service-id {service_id}" in caplog.text

    def test_missing_parent_directory_is_fatal(self, tmp_path: Path) -> None:
        provider = FileIdentityProvider(tmp_path / "no" / "such" / "dir" / "id")
        with pytest.raises(IdentityError) as exc_info:
            provider.ensure_identity()
        assert exc_info.value.severity is ErrorSeverity.CRITICAL
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_directory_path_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(IdentityError):
            FileIdentityProvider(tmp_path).ensure_identity()

    def test_failure_is_logged_critical(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("CRITICAL", logger="healthz.identity.provider"):
            with pytest.raises(IdentityError):
                FileIdentityProvider(tmp_path).ensure_identity()
        assert any(r.levelname == "CRITICAL" for r in caplog.records)

    def test_error_context_has_path(self, tmp_path: Path) -> None:
        with pytest.raises(IdentityError) as exc_info:
            FileIdentityProvider(tmp_path).ensure_identity()
        assert exc_info.value.context["path"] == str(tmp_path)

    def test_path_property(self, id_file: Path) -> None:
        assert FileIdentityProvider(str(id_file)).path == id_file


class TestStaticIdentityProvider:
    def test_returns_fixed_value(self) -> None:
        provider = StaticIdentityProvider("api-fixed")
        assert provider.ensure_identity() == "api-fixed"

    def test_is_identity_provider(self) -> None:
        assert isinstance(StaticIdentityProvider("x"), IdentityProvider)


class TestEnsureIdentityHelper:
    def test_round_trip_through_file(self, id_file: Path) -> None:
        created = ensure_identity(id_file)
        assert ensure_identity(id_file) == created

    def test_cannot_instantiate_abstract_provider(self) -> None:
        with pytest.raises(TypeError):
            IdentityProvider()  # type: ignore[abstract]
