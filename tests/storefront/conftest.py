import os

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_category():
    from protean.utils.globals import current_domain

    from storefront.category.management import CreateCategory

    def _make(name="Electronics", description="Phones, laptops and accessories"):
        return current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)

    return _make


@pytest.fixture()
def make_product(make_category):
    from protean.utils.globals import current_domain

    from storefront.product.management import CreateProduct

    counter = {"n": 0}

    def _make(name="Wireless Mouse", price=10.0, quantity=10, category_id=None, description="A product"):
        if category_id is None:
            counter["n"] += 1
            category_id = make_category(name=f"Category {counter['n']}")
        command = CreateProduct(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            category_id=category_id,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_user():
    from protean.utils.globals import current_domain

    from storefront.user.registration import RegisterUser

    counter = {"n": 0}

    def _make(name="Ada Lovelace", email=None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return current_domain.process(RegisterUser(name=name, email=email), asynchronous=False)

    return _make


@pytest.fixture()
def place_order():
    import json

    from protean.utils.globals import current_domain

    from storefront.order.placement import PlaceOrder

    def _place(user_id, line_items):
        command = PlaceOrder(user_id=user_id, line_items=json.dumps(line_items))
        return current_domain.process(command, asynchronous=False)

    return _place
