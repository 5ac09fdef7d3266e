"""
Errors raised by the polymorphic association helpers.

Storage failures (mongoengine / pymongo) are not wrapped; they reach the
caller unchanged, either raised from MorphQuery.execute() or handed to the
completion callback.
"""


class MorphError(Exception):
    """Base class for errors raised by morphable itself."""


class ConfigurationError(MorphError, ValueError):
    """A morph_by / morph_one / morph_many registration was given a missing or unusable name."""


class UnsavedOwnerError(MorphError):
    """An owner-side accessor was called on a document that has no primary key yet.

    The association id field would be stamped with None while the type field is
    set, so the owner must be saved first.
    """
