from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from setsync.app import build_sync_service
from setsync.config import ConfigurationError, SyncConfig
from setsync.domain.ports.catalog import CatalogAPIError
from setsync.ui import cli as cli_module
from tests.helpers.catalog import (
    FakeCatalogClient,
    FakeCatalogIdentity,
    FakeCategorySource,
    make_category,
)
from tests.helpers.throttle import FakeThrottleStore

if TYPE_CHECKING:
    from setsync.app import SyncService


@pytest.fixture
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    def fake_configure_logging(**kwargs: object) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(cli_module, "configure_logging", fake_configure_logging)
    return calls


@pytest.fixture
def source() -> FakeCategorySource:
    return FakeCategorySource([make_category(1), make_category(2, name="Bags")])


@pytest.fixture
def service_paths(
    monkeypatch: pytest.MonkeyPatch,
    catalog_client: FakeCatalogClient,
    source: FakeCategorySource,
) -> list[Path | None]:
    paths: list[Path | None] = []
    store = FakeThrottleStore()

    def fake_build(*, taxonomy_path: Path | None = None) -> SyncService:
        paths.append(taxonomy_path)
        return build_sync_service(
            catalog_client=catalog_client,
            catalog=FakeCatalogIdentity(),
            categories=source,
            throttle_store=store,
            sync_config=SyncConfig(),
        )

    monkeypatch.setattr(cli_module, "build_sync_service", fake_build)
    return paths


@pytest.mark.usefixtures("logging_calls")
def test_sync_all_runs_once_per_window(
    service_paths: list[Path | None],
    catalog_client: FakeCatalogClient,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO):
        cli_module.main(["--taxonomy-file", "categories.json", "sync-all"])
        cli_module.main(["sync-all"])

    assert service_paths == [Path("categories.json"), None]
    assert catalog_client.count("create") == 2
    assert "created=2" in caplog.text
    assert "Skipped" in caplog.text


@pytest.mark.usefixtures("logging_calls", "service_paths")
def test_sync_all_force_bypasses_throttle(catalog_client: FakeCatalogClient) -> None:
    cli_module.main(["sync-all"])
    cli_module.main(["sync-all", "--force"])

    assert catalog_client.count("update") == 2


@pytest.mark.usefixtures("logging_calls", "service_paths")
def test_sync_all_with_failures_exits_nonzero(catalog_client: FakeCatalogClient) -> None:
    catalog_client.create_errors["102"] = CatalogAPIError("Invalid parameter", code=100)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync-all"])

    assert excinfo.value.code == 1
    assert catalog_client.count("create") == 2


@pytest.mark.usefixtures("logging_calls", "service_paths")
def test_upsert_and_delete_commands(catalog_client: FakeCatalogClient) -> None:
    cli_module.main(["upsert", "--category-id", "2"])
    assert catalog_client.remote_id_for("102") is not None

    cli_module.main(["delete", "--taxonomy-instance-id", "102", "--name", "Bags"])

    assert catalog_client.remote_id_for("102") is None
    assert catalog_client.delete_force_flags == [True]


@pytest.mark.usefixtures("logging_calls", "service_paths")
def test_upsert_lookup_failure_exits_nonzero(catalog_client: FakeCatalogClient) -> None:
    catalog_client.read_errors["101"] = CatalogAPIError("timeout", retryable=True)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["upsert", "--category-id", "1"])

    assert excinfo.value.code == 1
    assert catalog_client.count("create") == 0


@pytest.mark.usefixtures("logging_calls", "service_paths")
def test_unknown_category_is_fatal(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["upsert", "--category-id", "99"])

    assert excinfo.value.code == 1
    assert "Category 99 not found" in caplog.text


@pytest.mark.usefixtures("logging_calls")
def test_configuration_error_exits_with_usage_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_build(**_: object) -> SyncService:
        raise ConfigurationError("Missing configuration for: SETSYNC_CATALOG_ID")

    monkeypatch.setattr(cli_module, "build_sync_service", failing_build)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync-all"])

    assert excinfo.value.code == 2


@pytest.mark.usefixtures("service_paths")
def test_clear_throttle_and_verbose_logging(
    logging_calls: list[dict[str, object]],
    catalog_client: FakeCatalogClient,
    tmp_path: Path,
) -> None:
    cli_module.main(["sync-all"])
    cli_module.main(["-v", "--debug-log", str(tmp_path / "debug.log"), "clear-throttle"])
    cli_module.main(["sync-all"])

    assert catalog_client.count("update") == 2
    assert logging_calls[1]["level"] == logging.DEBUG
    assert logging_calls[1]["debug_log_path"] == tmp_path / "debug.log"


@pytest.mark.usefixtures("logging_calls", "service_paths")
def test_rejects_non_positive_category_id() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["upsert", "--category-id", "0"])

    assert excinfo.value.code == 2
