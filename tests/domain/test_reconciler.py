from __future__ import annotations

import pytest

from setsync.domain.ports.catalog import CatalogAPIError
from setsync.domain.reconciler import Reconciler
from setsync.domain.result import Err, Ok, SyncErrorKind, SyncFailedError
from setsync.domain.types import SyncAction
from tests.helpers.catalog import FakeCatalogClient, FakeCatalogIdentity, make_category


def test_upsert_creates_when_not_found(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    result = reconciler.upsert(make_category(1, taxonomy_instance_id=11))

    assert isinstance(result, Ok)
    assert result.value.action is SyncAction.CREATED
    assert catalog_client.count("create") == 1
    assert catalog_client.count("update") == 0


def test_upsert_updates_existing_set(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.seed("11", remote_set_id="555")

    result = reconciler.upsert(make_category(1, taxonomy_instance_id=11))

    assert result.unwrap().action is SyncAction.UPDATED
    assert result.unwrap().remote_set_id == "555"
    assert ("update", "555") in catalog_client.calls
    assert catalog_client.count("create") == 0


def test_upsert_twice_is_idempotent(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    category = make_category(3, name="Hats")

    first = reconciler.upsert(category).unwrap()
    second = reconciler.upsert(category).unwrap()

    assert first.action is SyncAction.CREATED
    assert second.action is SyncAction.UPDATED
    assert second.remote_set_id == first.remote_set_id
    assert len(catalog_client.sets) == 1
    assert catalog_client.payloads[0] == catalog_client.payloads[1]


def test_upsert_never_duplicates_across_renames(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    reconciler.upsert(make_category(3, taxonomy_instance_id=30, name="Hats")).unwrap()
    reconciler.upsert(make_category(3, taxonomy_instance_id=30, name="Caps")).unwrap()
    reconciler.upsert(make_category(3, taxonomy_instance_id=30, name="Beanies")).unwrap()

    assert catalog_client.count("create") == 1
    assert len(catalog_client.sets) == 1


def test_lookup_failure_is_not_treated_as_not_found(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.read_errors["11"] = CatalogAPIError("timeout", retryable=True)

    result = reconciler.upsert(make_category(1, taxonomy_instance_id=11))

    assert isinstance(result, Err)
    assert result.error.kind is SyncErrorKind.LOOKUP
    assert result.error.retryable is True
    assert catalog_client.count("create") == 0


def test_create_failure_is_returned_as_write_error(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.create_errors["11"] = CatalogAPIError("Invalid parameter", code=100)

    result = reconciler.upsert(make_category(1, taxonomy_instance_id=11))

    assert isinstance(result, Err)
    assert result.error.kind is SyncErrorKind.WRITE
    assert result.error.operation == "create"
    assert result.error.code == 100
    with pytest.raises(SyncFailedError):
        result.unwrap()


def test_update_failure_is_returned_as_write_error(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.seed("11", remote_set_id="555")
    catalog_client.update_errors["555"] = CatalogAPIError("Service unavailable", retryable=True)

    result = reconciler.upsert(make_category(1, taxonomy_instance_id=11))

    assert isinstance(result, Err)
    assert result.error.operation == "update"


def test_missing_catalog_id_is_local_error(catalog_client: FakeCatalogClient) -> None:
    reconciler = Reconciler(client=catalog_client, catalog=FakeCatalogIdentity(None))

    result = reconciler.upsert(make_category())

    assert isinstance(result, Err)
    assert result.error.kind is SyncErrorKind.LOCAL
    assert catalog_client.calls == []


def test_delete_without_linked_set_is_noop(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    result = reconciler.delete(make_category(4).identity)

    assert result.unwrap().action is SyncAction.NOT_LINKED
    assert catalog_client.count("delete") == 0


def test_delete_forces_removal_of_linked_set(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.seed("104", remote_set_id="777")

    result = reconciler.delete(make_category(4).identity)

    assert result.unwrap().action is SyncAction.DELETED
    assert catalog_client.delete_force_flags == [True]
    assert catalog_client.sets == {}


def test_delete_failure_is_absorbed(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.seed("104", remote_set_id="777")
    catalog_client.delete_errors["777"] = CatalogAPIError("Product set in use", code=100)

    result = reconciler.delete(make_category(4).identity)

    assert isinstance(result, Ok)
    assert result.value.action is SyncAction.DELETE_FAILED


def test_delete_lookup_failure_is_reported(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    catalog_client.read_errors["104"] = CatalogAPIError("boom")

    result = reconciler.delete(make_category(4).identity)

    assert isinstance(result, Err)
    assert result.error.kind is SyncErrorKind.LOOKUP
    assert catalog_client.count("delete") == 0


def test_create_after_delete_is_allowed(
    reconciler: Reconciler, catalog_client: FakeCatalogClient
) -> None:
    category = make_category(5)
    reconciler.upsert(category).unwrap()
    reconciler.delete(category.identity).unwrap()
    reconciler.upsert(category).unwrap()

    assert catalog_client.count("create") == 2
    assert len(catalog_client.sets) == 1


def test_locks_are_released_after_use(reconciler: Reconciler) -> None:
    reconciler.upsert(make_category(6))

    assert len(reconciler.locks) == 0
