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

`Resource` is the base class for records of a Parse application.

Declare a subclass for each Parse class, with its schema as fields:

>>> class Post(Resource):
...     title  = fields.Field()
...     author = fields.Field()
...
>>> post = Post(title='A', author='B')
>>> post.save()
True
>>> post.id
'xyz'

An instance is *new* until it has been created on the server, *persisted*
once it has an ``objectId``, and dead once destroyed. Values set on it are
pending until a save sends them; the save performs a create for a new
instance and an update for a persisted one.

Saving and destroying never raise for a failed request. They return `False`
and leave the reason in the instance's `failure` attribute, one of the
`parseresource.errors` exceptions. Errors the server attributes to a field,
and local validation errors, are listed in `errors`.

The class-level shortcuts (`find()`, `all()`, `first()`, `count()`) return
`None` or `[]` for a failed request as they do for no results. To tell the
two apart, build the query with `query()` and check its `failure`:

>>> q = Post.query().where(objectId='xyz')
>>> post = q.first()
>>> if post is None and q.failure is not None:
...     log.warning('lookup failed: %s', q.failure)

"""

import logging

from parseresource import errors, fields
from parseresource.dataobject import DataObject
from parseresource.errors import (FieldError, RecordNotFound, RemoteRejection,
    TransportFailure, ValidationError)
from parseresource.hooks import run_hooks
from parseresource.http import Connection
from parseresource.query import Query


log = logging.getLogger('parseresource.resource')


class Resource(DataObject):

    objectId = fields.ReadOnly()
    createdAt = fields.ReadOnly(fields.Datetime())
    updatedAt = fields.ReadOnly(fields.Datetime())

    # Override the process-wide credentials for this class.
    application_id = None
    api_key = None
    master_key = None
    base_url = None

    validators = ()

    NotFound = errors.RecordNotFound
    ValidationError = errors.ValidationError
    RemoteRejection = errors.RemoteRejection
    TransportFailure = errors.TransportFailure

    def __init__(self, **kwargs):
        super(Resource, self).__init__(**kwargs)
        self.errors = []
        self.failure = None
        self._destroyed = False

    @property
    def id(self):
        return self.objectId

    @property
    def created_at(self):
        return self.createdAt

    @property
    def updated_at(self):
        return self.updatedAt

    @property
    def persisted(self):
        return self.id is not None

    @property
    def new(self):
        return not self.persisted

    @property
    def destroyed(self):
        return self._destroyed

    @property
    def dirty(self):
        """Whether the instance has values that haven't been saved."""
        return self._attributes.dirty

    def changes(self):
        return self._attributes.changes()

    @classmethod
    def collection_path(cls):
        return 'classes/%s' % cls.class_name

    def instance_path(self):
        return '%s/%s' % (self.collection_path(), self.id)

    def request_headers(self):
        """Returns extra headers to send with this instance's requests."""
        return {}

    # Validation

    def validate(self):
        """Checks the instance for errors beyond its declared `validators`.

        This implementation does nothing. Override it to call `add_error()`
        for anything wrong with the instance.

        """
        pass

    def add_error(self, field, message):
        self.errors.append(FieldError(field, message))

    def is_valid(self):
        """Returns whether the instance passes validation.

        The `errors` list is cleared and refilled with the reasons it
        doesn't.

        """
        context = 'create' if self.new else 'update'
        self.errors = []
        for validator in self.validators:
            if getattr(validator, 'on', None) in (None, context):
                self.errors.extend(FieldError(*e) for e in validator(self))
        self.validate()
        return not self.errors

    # Persistence

    def _check_alive(self, action):
        if self._destroyed:
            raise ValueError('Cannot %s %r, which was destroyed'
                % (action, self))

    def _send(self, method, path, http=None, body=None):
        """Makes a request for this instance, returning the decoded result,
        or `None` after recording why the request failed."""
        connection = Connection(type(self), http=http)
        try:
            return connection.fetch(method, path, body=body,
                headers=self.request_headers())
        except RemoteRejection as exc:
            log.debug('%s %s rejected: %s', method, path, exc)
            self.errors.append(exc.field_error())
            self.failure = exc
        except TransportFailure as exc:
            log.warning('%s %s failed: %s', method, path, exc)
            self.failure = exc
        return None

    def save(self, http=None):
        """Validates the instance, then creates or updates it on the server.

        Returns whether the save succeeded. If it didn't, the reason is in
        `failure` and any field errors are in `errors`.

        Optional parameter `http` is the user agent object to use. `http`
        objects should be compatible with `httplib2.Http` objects.

        """
        self._check_alive('save')
        self.failure = None
        if not self.is_valid():
            self.failure = ValidationError(self.errors)
            log.debug('Not saving invalid %r: %s', self, self.failure)
            return False

        run_hooks(self, 'before_save')
        if self.new:
            saved = self.create(http=http)
        else:
            saved = self.update(http=http)
        if saved:
            run_hooks(self, 'after_save')
        return saved

    def create(self, http=None):
        """Creates the new instance on the server with its pending values.

        On success the instance takes the ``objectId`` and ``createdAt`` the
        server assigned and is persisted. Returns whether it succeeded.

        """
        self._check_alive('create')
        if self.persisted:
            raise ValueError('Cannot create %r, which already exists' % (self,))
        self.failure = None

        run_hooks(self, 'before_create')
        data = self._send('POST', self.collection_path(), http=http,
            body=self.changes())
        if data is None:
            return False
        if 'objectId' not in data:
            self.failure = TransportFailure('Response creating %s had no'
                ' objectId: %r' % (type(self).__name__, data))
            log.warning('%s', self.failure)
            return False

        self._attributes.merge(data)
        log.debug('Created %s %s', type(self).__name__, self.id)
        run_hooks(self, 'after_create')
        return True

    def update(self, http=None):
        """Sends the pending values of the persisted instance to the server.

        Returns whether it succeeded.

        """
        self._check_alive('update')
        if self.new:
            raise ValueError('Cannot update %r, which was never created'
                % (self,))
        self.failure = None

        run_hooks(self, 'before_update')
        data = self._send('PUT', self.instance_path(), http=http,
            body=self.changes())
        if data is None:
            return False

        self._attributes.merge(data)
        log.debug('Updated %s %s', type(self).__name__, self.id)
        run_hooks(self, 'after_update')
        return True

    def destroy(self, http=None):
        """Deletes the persisted instance from the server.

        Whatever the server answers, the instance is emptied and can't be
        used again. Returns whether the server confirmed the deletion.

        """
        self._check_alive('destroy')
        if self.new:
            raise ValueError('Cannot destroy %r, which was never created'
                % (self,))
        self.failure = None

        run_hooks(self, 'before_destroy')
        confirmed = self._send('DELETE', self.instance_path(), http=http) is not None

        log.debug('Destroyed %s %s', type(self).__name__, self.id)
        self._attributes.reset()
        self._destroyed = True
        if confirmed:
            run_hooks(self, 'after_destroy')
        return confirmed

    # Querying

    @classmethod
    def query(cls, http=None):
        """Returns an unfiltered `Query` for this class.

        After a terminal method runs, the query's `failure` holds the reason
        the request failed, or `None` if it succeeded.

        """
        return Query(cls, http=http)

    @classmethod
    def find(cls, id, http=None):
        """Returns the instance with the given ``objectId``, or `None` if
        there isn't one.

        Raises `RecordNotFound` when `id` is empty, without making a request.
        A failed request also returns `None`; use `query()` to see why.

        """
        if not id:
            raise RecordNotFound('Cannot find %s without an id' % cls.__name__)
        return cls.query(http=http).where(objectId=id).first()

    @classmethod
    def where(cls, *args, **kwargs):
        return cls.query().where(*args, **kwargs)

    @classmethod
    def include_object(cls, name):
        return cls.query().include_object(name)

    @classmethod
    def limit(cls, n):
        return cls.query().limit(n)

    @classmethod
    def order(cls, name):
        return cls.query().order(name)

    @classmethod
    def count(cls, http=None):
        return cls.query(http=http).count()

    @classmethod
    def all(cls, http=None):
        return cls.query(http=http).all()

    @classmethod
    def first(cls, http=None):
        return cls.query(http=http).first()

    @classmethod
    def create_with(cls, http=None, **attributes):
        """Builds and saves a new instance with the given values.

        Returns the saved instance, or `False` if it couldn't be saved.

        """
        obj = cls(**attributes)
        if not obj.save(http=http):
            return False
        return obj

    @classmethod
    def destroy_all(cls, http=None):
        for obj in cls.all(http=http):
            obj.destroy(http=http)
