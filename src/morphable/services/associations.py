"""
Polymorphic associations for MongoEngine documents.

An owned model (e.g. Photo) can belong to any owner model (Passport, Product,
...) through a pair of fields on the owned side:

    <morph_name>_id    ObjectId of the owner
    <morph_name>_type  class name of the owner, derived from its collection name

Each registration function is a class factory; the returned class is listed
among the document's bases:

    class Photo(morph_by('Passport', 'photoable'), mongoengine.Document): ...
    class Passport(morph_one('Photo', 'photoable'), mongoengine.Document): ...
    class Product(morph_many('Photo', 'photoable'), mongoengine.Document): ...

Generated accessors return a MorphQuery (see services.deferred) unless a
callback is given, in which case they run immediately and call
callback(error, result).
"""
import logging
from typing import Callable, Optional

import mongoengine
from mongoengine.base import get_document

from morphable.errors import ConfigurationError, UnsavedOwnerError
from morphable.infrastructure.naming import default_naming
from morphable.services import deferred
from morphable.services.deferred import MorphQuery

log = logging.getLogger(__name__)


def id_field(morph_name: str) -> str:
    return morph_name + '_id'


def type_field(morph_name: str) -> str:
    return morph_name + '_type'


"""
Compute the model name stored in the discriminator field for `owner`.

The name comes from the owner's collection, not its Python class, so it is
the class name the document registry resolves: 'passports' -> 'Passport'.
"""
def owner_type_name(owner: mongoengine.Document, naming=None) -> str:
    naming = naming or default_naming
    return naming.classify(naming.singularize(owner._get_collection_name()))


"""
Build the criteria correlating owned documents back to `owner`.

Returns:
    {'<morph_name>_id': owner.pk, '<morph_name>_type': <owner model name>}

Raises UnsavedOwnerError if the owner has no primary key yet.
"""
def build_criteria(owner: mongoengine.Document, morph_name: str, naming=None) -> dict:
    if owner.pk is None:
        raise UnsavedOwnerError('%s must be saved before using its %r association'
                                % (type(owner).__name__, morph_name))

    return {
        id_field(morph_name): owner.pk,
        type_field(morph_name): owner_type_name(owner, naming),
    }


def _require(value, description: str):
    if not value or not isinstance(value, str):
        raise ConfigurationError('No %s provided' % description)


def _dispatch(query: MorphQuery, callback: Optional[Callable]):
    # No callback: hand the caller the deferred command.
    if callback is None:
        return query

    return query.execute(callback)


def _accessor(function: Callable, name: str) -> Callable:
    function.__name__ = name
    function.__qualname__ = name
    return function


"""
Inverse side: let an owned document reach its owner.

Adds indexed `<morph_name>_id` (ObjectId) and `<morph_name>_type` (string)
fields and a `<morph_name>(callback=None)` method returning the owner.

The owner model is looked up in the document registry by the stored
discriminator; `model_name` is used when the discriminator is unset.
"""
def morph_by(model_name: str, morph_name: str, naming=None):
    _require(model_name, 'model name')
    _require(morph_name, 'polymorphic name')
    naming = naming or default_naming

    morph_id = id_field(morph_name)
    morph_type = type_field(morph_name)

    def find_owner(self, callback=None):
        owner_model = get_document(getattr(self, morph_type) or model_name)
        query = MorphQuery(owner_model.objects(pk=getattr(self, morph_id)),
                           deferred.fetch_one, '%s.%s' % (type(self).__name__, morph_name))
        return _dispatch(query, callback)

    attrs = {
        '__module__': __name__,
        morph_id: mongoengine.ObjectIdField(),
        morph_type: mongoengine.StringField(),
        morph_name: _accessor(find_owner, morph_name),
        'meta': {
            'abstract': True,
            'indexes': [morph_id, morph_type],
        },
    }

    log.debug('morph_by: %s(%s) owned through %s', morph_name, model_name, morph_id)
    return type('%sMorphBy%s' % (naming.classify(morph_name), model_name), (mongoengine.Document,), attrs)


"""
Owner side, one-to-one: get_<model>, set_<model> and remove_<model>.

set_<model> upserts, so an owner has at most one owned document per association.
"""
def morph_one(model_name: str, morph_name: str, naming=None):
    _require(model_name, 'model name')
    _require(morph_name, 'polymorphic name')
    naming = naming or default_naming

    # Singularize in case a plural model name was given.
    model_name = naming.singularize(model_name)
    suffix = naming.underscore(model_name)

    def owned(self):
        criteria = build_criteria(self, morph_name, naming)
        return criteria, get_document(model_name).objects(**criteria)

    def get_one(self, callback=None):
        _, queryset = owned(self)
        query = MorphQuery(queryset, deferred.fetch_one, 'get_' + suffix)
        return _dispatch(query, callback)

    def set_one(self, payload: dict, callback=None):
        criteria, queryset = owned(self)

        # Criteria win over anything the payload says about the association.
        values = dict(payload)
        values.update(criteria)

        query = MorphQuery(queryset, deferred.upsert(values), 'set_' + suffix)
        return _dispatch(query, callback)

    def remove_one(self, callback=None):
        _, queryset = owned(self)
        query = MorphQuery(queryset, deferred.remove_one, 'remove_' + suffix)
        return _dispatch(query, callback)

    methods = {
        '__module__': __name__,
        'get_' + suffix: _accessor(get_one, 'get_' + suffix),
        'set_' + suffix: _accessor(set_one, 'set_' + suffix),
        'remove_' + suffix: _accessor(remove_one, 'remove_' + suffix),
    }

    log.debug('morph_one: %s via %s', model_name, morph_name)
    return type('%sMorphOne%s' % (naming.classify(morph_name), model_name), (object,), methods)


"""
Owner side, one-to-many: get_<model>, get_<models>, add_<model>,
remove_<model> and remove_<models>.
"""
def morph_many(model_name: str, morph_name: str, naming=None):
    _require(model_name, 'model name')
    _require(morph_name, 'polymorphic name')
    naming = naming or default_naming

    model_name = naming.singularize(model_name)
    suffix = naming.underscore(model_name)
    plural_suffix = naming.underscore(naming.pluralize(model_name))

    if suffix == plural_suffix:
        raise ConfigurationError('%s has the same singular and plural form; '
                                 'accessor names would collide' % model_name)

    def owned(self, **query):
        criteria = build_criteria(self, morph_name, naming)
        return criteria, get_document(model_name).objects(**criteria).filter(**query)

    def get_one(self, pk, callback=None):
        _, queryset = owned(self, pk=pk)
        query = MorphQuery(queryset, deferred.fetch_one, 'get_' + suffix)
        return _dispatch(query, callback)

    def get_all(self, callback=None):
        _, queryset = owned(self)
        query = MorphQuery(queryset, deferred.fetch_all, 'get_' + plural_suffix)
        return _dispatch(query, callback)

    def add(self, payload, callback=None):
        criteria = build_criteria(self, morph_name, naming)

        # A list / tuple is a batch, anything else a single payload.
        many = isinstance(payload, (list, tuple))
        items = list(payload) if many else [payload]

        action = deferred.create(get_document(model_name), items, criteria, many)
        query = MorphQuery(None, action, 'add_' + suffix)
        return _dispatch(query, callback)

    def remove_one(self, pk, callback=None):
        _, queryset = owned(self, pk=pk)
        query = MorphQuery(queryset, deferred.remove_one, 'remove_' + suffix)
        return _dispatch(query, callback)

    def remove_all(self, callback=None):
        _, queryset = owned(self)
        query = MorphQuery(queryset, deferred.remove_all, 'remove_' + plural_suffix)
        return _dispatch(query, callback)

    methods = {
        '__module__': __name__,
        'get_' + suffix: _accessor(get_one, 'get_' + suffix),
        'get_' + plural_suffix: _accessor(get_all, 'get_' + plural_suffix),
        'add_' + suffix: _accessor(add, 'add_' + suffix),
        'remove_' + suffix: _accessor(remove_one, 'remove_' + suffix),
        'remove_' + plural_suffix: _accessor(remove_all, 'remove_' + plural_suffix),
    }

    log.debug('morph_many: %s / %s via %s', model_name, plural_suffix, morph_name)
    return type('%sMorphMany%s' % (naming.classify(morph_name), model_name), (object,), methods)
