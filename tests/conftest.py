from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from setsync.adapters.sqlalchemy import create_all_tables, shutdown
from setsync.domain.reconciler import Reconciler
from tests.helpers.catalog import FakeCatalogClient, FakeCatalogIdentity

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def reset_sqlalchemy_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


@pytest.fixture
def catalog_client() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def reconciler(catalog_client: FakeCatalogClient) -> Reconciler:
    return Reconciler(client=catalog_client, catalog=FakeCatalogIdentity())
