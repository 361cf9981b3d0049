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

Translation of Parse backend errors into field-level messages, and the kinds
of failure a `Resource` operation can end in.

Parse reports a rejected request with a 4xx status and a body like
``{"code": 202, "error": "username taken"}``. `translate()` turns such a code
into a `FieldError` naming the attribute the error is about (or ``base`` when
the error is about the whole record).

"""

from collections import namedtuple


BASE = 'base'

FieldError = namedtuple('FieldError', ('field', 'message'))


# code: (field, message)
messages = {
    -1:  (BASE, 'an unknown error occurred'),
    1:   (BASE, 'the server encountered an internal error'),
    100: (BASE, 'the connection to the server failed'),
    101: (BASE, 'object not found'),
    102: (BASE, 'is an invalid query'),
    103: (BASE, 'has an invalid class name'),
    104: (BASE, 'is missing an object id'),
    105: (BASE, 'has an invalid key name'),
    106: (BASE, 'has a malformed pointer'),
    107: (BASE, 'was not valid JSON'),
    108: (BASE, 'command unavailable'),
    111: (BASE, 'has a field of the incorrect type'),
    116: (BASE, 'is too large'),
    119: (BASE, 'operation forbidden'),
    121: (BASE, 'has an invalid nested key'),
    123: (BASE, 'has an invalid ACL'),
    124: (BASE, 'request timed out'),
    125: ('email', 'is not a valid email address'),
    137: (BASE, 'has a duplicate value for a unique field'),
    141: (BASE, 'cloud code script failed'),
    142: (BASE, 'failed cloud code validation'),
    155: (BASE, 'request limit exceeded'),
    200: ('username', 'is missing or blank'),
    201: ('password', 'is missing or blank'),
    202: ('username', 'has already been taken'),
    203: ('email', 'has already been taken'),
    204: ('email', 'must be provided'),
    205: ('email', 'was not found'),
    206: (BASE, 'session is missing'),
    208: (BASE, 'account is already linked to another user'),
    209: (BASE, 'session token is invalid'),
}


def translate(code, message=None):
    """Returns the `FieldError` for the Parse error `code`.

    Unknown codes (and values that aren't codes at all) produce a ``base``
    error carrying the server's own `message`, if one was given. This never
    raises, as it's used while handling other errors.

    """
    try:
        code = int(code)
    except (TypeError, ValueError):
        code = None

    try:
        field, text = messages[code]
    except KeyError:
        if message:
            return FieldError(BASE, message)
        if code is None:
            return FieldError(BASE, 'unknown error')
        return FieldError(BASE, 'unknown error (code %d)' % code)
    return FieldError(field, text)


class ParseResourceError(Exception):
    """Base class of all the failures a `Resource` operation can end in."""
    pass


class ValidationError(ParseResourceError):
    """A record failed its local validation, so no request was made.

    The reasons are the instance's `errors`.

    """

    def __init__(self, errors):
        self.errors = list(errors)
        super(ValidationError, self).__init__(
            '; '.join('%s %s' % e for e in self.errors))


class RemoteRejection(ParseResourceError):
    """The server refused a request with a structured error code."""

    def __init__(self, code, message=None, status=None):
        self.code = code
        self.message = message
        self.status = status
        super(RemoteRejection, self).__init__(
            '%s error %s: %s' % (status, code, message))

    def field_error(self):
        return translate(self.code, self.message)


class TransportFailure(ParseResourceError):
    """The server couldn't be reached, or answered with something that isn't
    a Parse response."""
    pass


class RecordNotFound(ParseResourceError):
    """`find()` was asked for a record without an id."""
    pass
