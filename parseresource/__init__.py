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

parseresource maps the records of a Parse application onto real
subclassable Python objects.

You define each Parse class as a `Resource` subclass with its fields. The
objects then track which of their values are unsaved, save themselves with
a create or an update as appropriate, and can be found with chainable
queries.

parseresource has:

* declared fields with coding between Python values and Parse's JSON types

* HTTP support through the `httplib2` library

* queries built up a condition at a time and made in one request

* failures reported as return values, with the kind of failure kept for
  inspection, instead of exceptions


Example
=======

    >>> import parseresource
    >>> from parseresource import Resource, fields
    >>> parseresource.configure(application_id='app', api_key='key')
    >>> class Post(Resource):
    ...     title  = fields.Field()
    ...     author = fields.Field()
    ...
    >>> Post(title='A', author='B').save()
    True
    >>> [p.title for p in Post.where(author='B').order('createdAt').limit(2)]
    ['A']

"""

__version__ = '1.0'

import parseresource.dataobject
from parseresource import fields
from parseresource.errors import (FieldError, ParseResourceError,
    RecordNotFound, RemoteRejection, TransportFailure, ValidationError,
    translate)
from parseresource.hooks import hook
from parseresource.http import Connection, configure, settings
from parseresource.query import Query
from parseresource.resource import Resource
from parseresource.user import User
from parseresource.validators import Length, Presence

__all__ = ('Resource', 'User', 'Query', 'fields', 'hook', 'Presence',
    'Length', 'configure', 'settings', 'Connection', 'translate',
    'FieldError', 'ParseResourceError', 'ValidationError', 'RemoteRejection',
    'TransportFailure', 'RecordNotFound')
