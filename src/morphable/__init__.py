"""
Polymorphic associations (morph_by, morph_one, morph_many) for MongoEngine documents.
"""
from morphable.errors import ConfigurationError, MorphError, UnsavedOwnerError
from morphable.infrastructure.naming import Inflector
from morphable.services.associations import build_criteria, morph_by, morph_many, morph_one, owner_type_name
from morphable.services.deferred import MorphQuery

__all__ = [
    'ConfigurationError',
    'Inflector',
    'MorphError',
    'MorphQuery',
    'UnsavedOwnerError',
    'build_criteria',
    'morph_by',
    'morph_many',
    'morph_one',
    'owner_type_name',
]
