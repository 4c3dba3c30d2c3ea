"""Fixtures for model port contract tests."""

from collections.abc import Iterable

import pytest

from modeldef.adapters import SQLAlchemyModelClass
from modeldef.interfaces.model import ModelClass
from tests.helpers.shop_models import Order


@pytest.fixture(params=["sqlalchemy", "fake"])
def order_class(request: pytest.FixtureRequest, fake_shop) -> Iterable[ModelClass]:
    """Yield the `Order` model class for the requested backend.

    Supported params:
      - `"sqlalchemy"` → `SQLAlchemyModelClass` over `tests.helpers.shop_models`
      - `"fake"` → `FakeModelClass` from the `fake_shop` registry

    Both expose an ``orders`` table with ``customer_id``, ``status``
    (default ``"pending"``, restricted values) and ``notes`` columns, a
    ``customer`` belongs_to and a ``tags`` many-to-many.
    """

    match request.param:
        case "sqlalchemy":
            yield SQLAlchemyModelClass(Order)
        case "fake":
            yield fake_shop.classes["Order"]
        case _:
            raise ValueError(f"unknown model backend: {request.param}")
