"""Pytest fixtures for the infrastructure tests."""

import logging

import pytest

from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Money
from wholesale.infrastructure.bootstrap import build_engine, init_db, unit_of_work_factory


@pytest.fixture
def engine(tmp_path):
    """A fresh SQLite database file with the schema created."""
    engine = build_engine(f"sqlite:///{tmp_path / 'wholesale.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def uow_factory(engine):
    return unit_of_work_factory(engine)


@pytest.fixture
def seeded(uow_factory):
    """Two sellers' worth of products."""
    with uow_factory() as uow:
        for product in (
            Product(id="A", seller_id="s1", name="Blue Dream", price=Money.of("10.00"), available_quantity=5),
            Product(id="B", seller_id="s1", name="Sour Diesel", price=Money.of("4.50"), available_quantity=3),
            Product(id="C", seller_id="s2", name="Gelato", price=Money.of("20.00"), available_quantity=10),
        ):
            uow.products.save(product)
        uow.commit()
    return uow_factory


@pytest.fixture(autouse=True)
def _restore_wholesale_logger():
    """The CLI installs a console handler; keep it from leaking between tests."""
    logger = logging.getLogger("wholesale")
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
