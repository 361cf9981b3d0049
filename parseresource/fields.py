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

Fields are class attributes for `Resource` subclasses that declare the
record's schema and provide coding between Python values and the JSON values
Parse stores.

A field reads through the instance's attribute store: the locally set
(pending) value if there is one, else the last value the server confirmed.
Setting a field encodes the value and writes it to the pending layer only.

"""

from datetime import datetime, timezone

import parseresource.dataobject


class Field(object):

    """A declared attribute of a `Resource`.

    Use a `Field` instance directly for strings, numbers, booleans and plain
    JSON structures. For values that need converting, use (or write) a
    `Field` subclass overriding `decode()` and `encode()`.

    """

    def __init__(self, api_name=None, default=None):
        """Sets the field's key in the Parse record and its default value.

        Optional parameter `api_name` is the key of this field's value in the
        record. If not given, the attribute name the field is declared as is
        used.

        Optional parameter `default` is the value to use when the record has
        no value for the field. It can be a callable, in which case it is
        called with the instance.

        """
        self.api_name = api_name
        self.default = default

    def install(self, attrname, cls):
        self.attrname = attrname
        if self.api_name is None:
            self.api_name = attrname
        self.of_cls = cls

    def __get__(self, obj, cls):
        if obj is None:
            # Yield the real field instance when gotten through the class.
            return self

        store = obj._attributes
        if self.api_name not in store:
            if callable(self.default):
                return self.default(obj)
            return self.default
        return self.decode(store.get(self.api_name))

    def __set__(self, obj, value):
        if value is not None:
            value = self.encode(value)
        obj._attributes.set(self.api_name, value)

    def __delete__(self, obj):
        # Only an unsaved value can be taken back.
        obj._attributes.discard(self.api_name)

    def decode(self, value):
        """Decodes a record value into an attribute value.

        This implementation returns `value` unchanged.

        """
        return value

    def encode(self, value):
        """Encodes an attribute value into a record value.

        This implementation returns `value` unchanged.

        """
        return value


class ReadOnly(Field):

    """A field only the server assigns, such as ``objectId``.

    Optional parameter `fld` is another field to code the value through. A
    value the server sent that `fld` can't decode is returned as sent.

    """

    def __init__(self, fld=None, **kwargs):
        super(ReadOnly, self).__init__(**kwargs)
        self.fld = fld

    def decode(self, value):
        if self.fld is None:
            return value
        try:
            return self.fld.decode(value)
        except (TypeError, ValueError):
            return value

    def encode(self, value):
        if self.fld is None:
            return value
        return self.fld.encode(value)

    def __set__(self, obj, value):
        raise AttributeError('%s.%s is assigned by the server'
            % (type(obj).__name__, self.attrname))

    def __delete__(self, obj):
        raise AttributeError('%s.%s is assigned by the server'
            % (type(obj).__name__, self.attrname))


class List(Field):

    """A field representing a homogeneous list of data.

    The elements of the list are coded through another field specified when
    the `List` is declared.

    """

    def __init__(self, fld, **kwargs):
        super(List, self).__init__(**kwargs)
        self.fld = fld

    def install(self, attrname, cls):
        super(List, self).install(attrname, cls)

        # Make sure our content field knows its owner too.
        self.fld.install(attrname, cls)

    def decode(self, value):
        if value is None:
            return None
        return [self.fld.decode(v) for v in value]

    def encode(self, value):
        return [self.fld.encode(v) for v in value]


class Dict(List):

    """A field representing a homogeneous mapping of data."""

    def decode(self, value):
        if value is None:
            return None
        return dict((k, self.fld.decode(v)) for k, v in value.items())

    def encode(self, value):
        return dict((k, self.fld.encode(v)) for k, v in value.items())


class Datetime(Field):

    """A field representing a timestamp.

    Parse sends ``createdAt`` and ``updatedAt`` as bare ISO 8601 strings, and
    stores other dates as ``{"__type": "Date", "iso": ...}`` objects. Both
    decode to `datetime` instances in UTC. Values are encoded as ``Date``
    objects.

    """

    dateformats = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ")

    def decode(self, value):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get('iso')
        for dateformat in self.dateformats:
            try:
                return datetime.strptime(value, dateformat).replace(
                    tzinfo=timezone.utc)
            except (TypeError, ValueError):
                continue

        # Other ISO 8601 forms, such as with a "+00:00" offset.
        if isinstance(value, str):
            text = value[:-1] + '+00:00' if value.endswith('Z') else value
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                pass
            else:
                if parsed.tzinfo is None:
                    return parsed.replace(tzinfo=timezone.utc)
                return parsed.astimezone(timezone.utc)

        raise TypeError('Value to decode %r is not a valid date time stamp'
            % (value,))

    def encode(self, value):
        return {'__type': 'Date', 'iso': isoformat(value)}


def isoformat(value):
    """Formats a `datetime` the way Parse does, in UTC with milliseconds."""
    if not isinstance(value, datetime):
        raise TypeError('Value to encode %r is not a datetime' % (value,))
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return '%s.%03dZ' % (value.strftime('%Y-%m-%dT%H:%M:%S'),
        value.microsecond // 1000)


class AcceptsStringCls(object):
    """Mixin for fields with a ``cls`` attribute that can either be a
    `Resource` subclass or the name of one (to allow forward references)."""

    def get_cls(self):
        cls = self.__dict__['cls']
        if not callable(cls):
            cls = parseresource.dataobject.find_by_name(cls)
        return cls

    def set_cls(self, cls):
        self.__dict__['cls'] = cls

    cls = property(get_cls, set_cls)


class Pointer(AcceptsStringCls, Field):

    """A field referencing another record.

    A plain pointer decodes to a persisted instance of `cls` holding only its
    ``objectId``. When the query asked for the related record to be included
    (see `Query.include_object()`), the pointer arrives as a whole object and
    decodes to a fully populated instance.

    """

    def __init__(self, cls, **kwargs):
        super(Pointer, self).__init__(**kwargs)
        self.cls = cls

    def decode(self, value):
        if value is None:
            return None
        if not isinstance(value, dict):
            raise TypeError('Value to decode %r is not a pointer' % (value,))
        data = dict((k, v) for k, v in value.items()
            if k not in ('__type', 'className'))
        return self.cls.from_dict(data)

    def encode(self, value):
        return pointer_to(value)


def pointer_to(obj):
    """Returns the Parse pointer to the persisted `Resource` instance `obj`."""
    if getattr(obj, 'id', None) is None:
        raise ValueError('Cannot point to %r, which is not a saved record'
            % (obj,))
    return {
        '__type': 'Pointer',
        'className': obj.class_name,
        'objectId': obj.id,
    }
