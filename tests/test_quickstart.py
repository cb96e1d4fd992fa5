"""Test that the top-level quickstart API works for healthz."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import healthz

    assert healthz.__version__ == "0.1.0"


def test_quickstart_registry(tmp_path) -> None:
    from healthz import Healthz, HealthzConfig, Status

    hz = Healthz(HealthzConfig(service_file=tmp_path / "sid"))
    hz.add_check("database", "primary", lambda h, c: Status.PASS)
    report = hz.run_checks()

    assert report.is_healthy()
    assert report.metadata["service_id"] == (tmp_path / "sid").read_text(encoding="utf-8")


def test_quickstart_public_names() -> None:
    import healthz

    for name in healthz.__all__:
        assert hasattr(healthz, name), name


def test_quickstart_repr() -> None:
    from healthz import Healthz, StaticIdentityProvider

    hz = Healthz(identity_provider=StaticIdentityProvider("api-repr"))
    assert "api-repr" in repr(hz)
