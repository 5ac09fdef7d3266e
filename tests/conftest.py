import mongoengine
import mongomock
import pytest

from morphable.data import mongo_setup
from tests.models import ALL_MODELS, Passport, Product


@pytest.fixture(scope='session', autouse=True)
def mongo():
    mongo_setup.global_init(name='morphable_test', mongo_client_class=mongomock.MongoClient)
    yield
    mongoengine.disconnect(alias=mongo_setup.DEFAULT_ALIAS)


@pytest.fixture(autouse=True)
def clean_collections(mongo):
    yield
    for model in ALL_MODELS:
        model.drop_collection()


@pytest.fixture
def passport():
    return Passport(number='P-1001').save()


@pytest.fixture
def product():
    return Product(name='Terrarium', price=49.0).save()
