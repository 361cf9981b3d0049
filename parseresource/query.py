# Copyright (c) 2009-2010 Six Apart Ltd.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of Six Apart Ltd. nor the names of its contributors may
#   be used to endorse or promote products derived from this software without
#   specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

"""

Chainable queries against a `Resource` class's collection.

>>> posts = Post.where(author='B').order('createdAt').limit(2).all()

Each chained call returns a new `Query` with the added condition, leaving
the original untouched. Nothing is requested until a terminal method
(`all()`, `first()` or `count()`) runs, which makes exactly one request.

Terminal methods never raise for a failed request. They return an empty
result (``[]``, ``None``) and record the failure in the query's `failure`
attribute.

"""

from copy import copy
import logging

import simplejson as json

from parseresource import fields
from parseresource.dataobject import DataObject
from parseresource.errors import (FieldError, ParseResourceError,
    TransportFailure, ValidationError)
from parseresource.http import Connection


log = logging.getLogger('parseresource.query')


def encode_condition(value, field=None):
    """Encodes a `where()` value for the query's filter.

    Values are coded through the declared `field` they're compared with, if
    there is one. `Resource` instances become pointers, and the operands of
    constraint dictionaries such as ``{"$gt": 5}`` are encoded in turn.
    Other dictionaries are taken to be in the record's form already.

    """
    if isinstance(field, fields.List):
        # Array fields are matched against their elements.
        field = field.fld
    if isinstance(value, dict):
        if value and all(str(k).startswith('$') for k in value):
            return dict((k, encode_condition(v, field))
                for k, v in value.items())
        return value
    if isinstance(value, (list, tuple)):
        return [encode_condition(v, field) for v in value]
    if isinstance(value, DataObject):
        return fields.pointer_to(value)
    if value is None or field is None:
        return value
    return field.encode(value)


class Query(object):

    def __init__(self, cls, http=None):
        """Starts an unfiltered query for instances of the `Resource`
        subclass `cls`.

        Optional parameter `http` is the user agent to make the request
        with.

        """
        self.cls = cls
        self.http = http
        self.conditions = {}
        self._limit = None
        self._order = None
        self._include = None
        self.failure = None

    def __repr__(self):
        return '<Query %s %r>' % (self.cls.__name__, self.conditions)

    def _clone(self):
        query = copy(self)
        query.conditions = dict(self.conditions)
        query.failure = None
        return query

    def where(self, *args, **kwargs):
        """Returns a query further restricted to records whose fields equal
        the given values.

        Conditions may be given as dictionaries or keyword arguments. A
        later condition on a field replaces an earlier one.

        """
        query = self._clone()
        for conditions in args + (kwargs,):
            for name, value in conditions.items():
                field = self.cls.field_for(name)
                key = field.api_name if field is not None else name
                query.conditions[key] = value
        return query

    def encoded_conditions(self):
        """Returns the query's conditions in the record's form."""
        return dict((key, encode_condition(value, self.cls.field_for(key)))
            for key, value in self.conditions.items())

    def include_object(self, name):
        """Returns a query that also fetches the whole record referenced by
        the pointer field `name`, instead of just its pointer."""
        query = self._clone()
        query._include = name
        return query

    def limit(self, n):
        query = self._clone()
        query._limit = n
        return query

    def order(self, name):
        query = self._clone()
        query._order = name
        return query

    def params(self, count=False):
        """Returns the query string parameters for this query."""
        params = {}
        if self.conditions:
            params['where'] = json.dumps(self.encoded_conditions(),
                sort_keys=True)
        if count:
            # A count request still has to bound the rows it returns.
            params['count'] = 1
            params['limit'] = 0
        elif self._limit is not None:
            params['limit'] = self._limit
        if self._order is not None:
            params['order'] = self._order
        if self._include is not None:
            params['include'] = self._include
        return params

    def fetch(self, count=False):
        self.failure = None
        try:
            params = self.params(count=count)
        except (TypeError, ValueError) as exc:
            self.failure = ValidationError([FieldError('base', str(exc))])
            log.warning('Query for %s has conditions that cannot be sent: %s',
                self.cls.__name__, exc)
            return None

        connection = Connection(self.cls, http=self.http)
        try:
            return connection.fetch('GET', self.cls.collection_path(),
                params=params)
        except ParseResourceError as exc:
            log.warning('Query for %s failed: %s', self.cls.__name__, exc)
            self.failure = exc
            return None

    def all(self):
        """Returns the list of matching instances.

        On failure, returns an empty list.

        """
        data = self.fetch()
        if data is None:
            return []
        results = data.get('results') or []
        if (not isinstance(results, list)
                or not all(isinstance(r, dict) for r in results)):
            self.failure = TransportFailure('Query response for %s had no'
                ' list of records: %r' % (self.cls.__name__, data))
            log.warning('%s', self.failure)
            return []
        if self._limit is not None:
            results = results[:self._limit]
        return [self.cls.from_dict(r) for r in results]

    def __iter__(self):
        return iter(self.all())

    def first(self):
        """Returns the first matching instance, or `None` if there is none
        or the request failed."""
        results = self.limit(1)
        found = results.all()
        self.failure = results.failure
        if not found:
            return None
        return found[0]

    def count(self, *args):
        """Returns the number of matching records, or `None` if the request
        failed.

        Any rows the server returns along with the count are ignored.

        """
        data = self.fetch(count=True)
        if data is None:
            return None
        try:
            return int(data['count'])
        except (KeyError, TypeError, ValueError):
            self.failure = TransportFailure('Count response for %s had no'
                ' count: %r' % (self.cls.__name__, data))
            log.warning('%s', self.failure)
            return None
