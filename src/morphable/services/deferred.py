"""
Deferred storage commands returned by the generated association accessors.

A MorphQuery pairs a MongoEngine queryset (already filtered by the association
criteria) with the action to run against it. Nothing touches the database
until execute() is called, so callers may keep narrowing the queryset first:

    photos = product.get_photos().filter(name='front').order_by('-name').execute()

Passing a callback to execute() runs the command immediately and reports the
outcome as callback(error, result).
"""
import logging
from typing import Callable, List, Optional

import pymongo.errors
from mongoengine.errors import (FieldDoesNotExist, InvalidQueryError, LookUpError,
                                NotRegistered, OperationError, ValidationError)

from morphable.errors import MorphError

log = logging.getLogger(__name__)

# Failures raised by mongoengine / pymongo while running a command.
# These are forwarded to the callback rather than raised.
STORAGE_ERRORS = (
    OperationError,
    ValidationError,
    InvalidQueryError,
    FieldDoesNotExist,
    LookUpError,
    NotRegistered,
    pymongo.errors.PyMongoError,
)


class MorphQuery:
    def __init__(self, queryset, action: Callable, description: str = ''):
        self.queryset = queryset
        self.action = action
        self.description = description

    def __repr__(self):
        return '<MorphQuery %s>' % (self.description or getattr(self.action, '__name__', 'action'))

    def _refine(self, method: str, *args, **kwargs) -> 'MorphQuery':
        if self.queryset is None:
            raise MorphError('%s cannot be refined before execution' % (self.description or 'this command'))

        queryset = getattr(self.queryset, method)(*args, **kwargs)
        return MorphQuery(queryset, self.action, self.description)

    def filter(self, *q_objs, **query) -> 'MorphQuery':
        return self._refine('filter', *q_objs, **query)

    def order_by(self, *keys) -> 'MorphQuery':
        return self._refine('order_by', *keys)

    def only(self, *fields) -> 'MorphQuery':
        return self._refine('only', *fields)

    def execute(self, callback: Optional[Callable] = None):
        """Run the command.

        Without a callback the result is returned and storage errors propagate.
        With a callback, callback(error, result) is invoked and its return value
        is returned; exactly one of error / result is meaningful.
        """
        log.debug('Executing %r', self)

        if callback is None:
            return self.action(self.queryset)

        try:
            result = self.action(self.queryset)
        except STORAGE_ERRORS as error:
            log.debug('%r failed: %s', self, error)
            return callback(error, None)

        return callback(None, result)


# Actions. Each takes the (possibly refined) queryset and performs one storage call.

def fetch_one(queryset):
    return queryset.first()


def fetch_all(queryset) -> List:
    return list(queryset)  # Force evaluation; materialize into list.


def remove_one(queryset):
    # find_one_and_delete: returns the removed document, or None.
    return queryset.modify(remove=True)


def remove_all(queryset) -> int:
    return queryset.delete()


"""
Build an upsert action: set every key of `values` on the matching document,
creating it if absent, and return the document as it is after the write.

Values are validated against the owned model's fields first, so a bad
payload fails with ValidationError the same way save() reports it.
"""
def upsert(values: dict) -> Callable:
    update = {'set__%s' % key: value for key, value in values.items()}

    def upsert_one(queryset):
        fields = queryset._document._fields
        for key, value in values.items():
            # Unknown keys are left to modify(), which raises InvalidQueryError.
            if value is None or key not in fields:
                continue
            fields[key].validate(fields[key].to_python(value))

        return queryset.modify(upsert=True, new=True, **update)

    return upsert_one


"""
Build a create action for `model`.

Each item is either a payload dict or an unsaved instance of `model`; the
criteria fields are stamped over it and it is saved. Items are saved in input
order. Returns the saved list when `many` is true, else the single document.
"""
def create(model, items: List, criteria: dict, many: bool) -> Callable:
    def create_documents(_queryset):
        saved = []
        for item in items:
            if isinstance(item, model):
                document = item
            elif isinstance(item, dict):
                document = model(**item)
            else:
                raise ValidationError('Cannot add %s as %s' % (type(item).__name__, model.__name__))

            for field, value in criteria.items():
                setattr(document, field, value)
            saved.append(document.save())

        return saved if many else saved[0]

    return create_documents
