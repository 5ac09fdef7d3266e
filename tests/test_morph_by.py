import mongoengine
import pytest
from mongoengine.errors import NotRegistered

from morphable import ConfigurationError, morph_by
from tests.models import Passport, Photo, Product, Video


def test_adds_indexed_association_fields():
    assert isinstance(Photo._fields['photoable_id'], mongoengine.ObjectIdField)
    assert isinstance(Photo._fields['photoable_type'], mongoengine.StringField)

    index_fields = [spec['fields'] for spec in Photo._meta['index_specs']]
    assert [('photoable_id', 1)] in index_fields
    assert [('photoable_type', 1)] in index_fields


def test_adds_owner_finder():
    assert callable(getattr(Photo(), 'photoable', None))
    assert Photo.photoable.__name__ == 'photoable'


def test_keeps_document_own_collection():
    assert Photo._get_collection_name() == 'photos'
    assert Video._get_collection_name() == 'videos'


@pytest.mark.parametrize('model_name, morph_name', [
    ('', 'photoable'),
    (None, 'photoable'),
    ('Passport', ''),
    ('Passport', None),
])
def test_missing_names_are_rejected(model_name, morph_name):
    with pytest.raises(ConfigurationError):
        morph_by(model_name, morph_name)


def test_resolves_owner_from_discriminator(passport, product):
    passport_photo = passport.set_photo({'name': 'front'}).execute()
    product_photo = product.add_photo({'name': 'box'}).execute()

    owner = passport_photo.photoable().execute()
    assert isinstance(owner, Passport)
    assert owner.pk == passport.pk

    owner = product_photo.photoable().execute()
    assert isinstance(owner, Product)
    assert owner.pk == product.pk


def test_falls_back_to_declared_model_without_discriminator(passport):
    photo = Photo(name='loose', photoable_id=passport.pk).save()

    owner = photo.photoable().execute()
    assert owner.pk == passport.pk


def test_unset_association_finds_nothing():
    photo = Photo(name='orphan').save()

    assert photo.photoable().execute() is None


def test_owner_finder_with_callback(product):
    video = product.add_video({'title': 'Unboxing'}).execute()
    received = []

    video.playable(lambda error, owner: received.append((error, owner)))

    error, owner = received[0]
    assert error is None
    assert owner.name == 'Terrarium'


def test_unknown_discriminator_is_reported():
    photo = Photo(name='stray', photoable_type='Spaceship').save()

    with pytest.raises(NotRegistered):
        photo.photoable()
