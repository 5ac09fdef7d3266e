import pytest

from morphable import Inflector


@pytest.fixture
def naming():
    return Inflector()


@pytest.mark.parametrize('collection, expected', [
    ('passports', 'Passport'),
    ('passport', 'Passport'),
    ('blog_posts', 'BlogPost'),
    ('categories', 'Category'),
])
def test_classify(naming, collection, expected):
    assert naming.classify(collection) == expected


def test_singularize_and_pluralize(naming):
    assert naming.singularize('Photos') == 'Photo'
    assert naming.pluralize('Photo') == 'Photos'


def test_underscore(naming):
    assert naming.underscore('BlogPost') == 'blog_post'
