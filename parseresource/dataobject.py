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

`DataObject` is the mechanism for converting between Parse records and
Python objects. The conversions are performed with the aid of the `Field`
instances declared on `DataObject` subclasses, from the
`parseresource.fields` module.

"""

import parseresource.fields
from parseresource.attributes import AttributeStore
from parseresource.hooks import collect_hooks


classes_by_name = {}


def find_by_name(name):
    """Finds and returns the DataObject subclass with the given name.

    Parameter `name` should be a bare class name with no module. If there is
    no class by that name, raises `KeyError`.

    """
    return classes_by_name[name]


class DataObjectMetaclass(type):

    """Metaclass for `DataObject` classes.

    This metaclass installs all `parseresource.fields.Field` instances
    declared as attributes of the new class, gathers its lifecycle hooks,
    and makes the new class findable through `find_by_name()`.

    """

    def __new__(cls, name, bases, attrs):
        fields = {}
        new_fields = {}

        # Inherit all the parent DataObject classes' fields.
        for base in bases:
            if isinstance(base, DataObjectMetaclass):
                fields.update(base.fields)

        for attrname, field in attrs.items():
            if isinstance(field, parseresource.fields.Field):
                new_fields[attrname] = field
            elif attrname in fields:
                # Throw out any parent fields that the subclass defined as
                # something other than a Field.
                del fields[attrname]

        fields.update(new_fields)
        attrs['fields'] = fields
        attrs['hooks'] = collect_hooks(bases, attrs)
        # A declared Parse class name is inherited, otherwise it's the
        # class's own name.
        if 'class_name' in attrs:
            attrs['_declared_class_name'] = True
        elif not any(getattr(b, '_declared_class_name', False) for b in bases):
            attrs['class_name'] = name
        obj_cls = super(DataObjectMetaclass, cls).__new__(cls, name, bases, attrs)

        for attrname, field in new_fields.items():
            field.install(attrname, obj_cls)

        # Register the new class so Pointer fields can forward-reference it.
        classes_by_name[name] = obj_cls

        return obj_cls


class DataObject(object, metaclass=DataObjectMetaclass):

    """An object that can be decoded from or encoded as a Parse record.

    DataObject subclasses declare their data attributes as instances of
    fields from the `parseresource.fields` module:

    >>> class Post(DataObject):
    ...     title   = fields.Field()
    ...     posted  = fields.Datetime()
    ...     author  = fields.Pointer('Author')
    ...

    Keyword arguments to the constructor are set as attributes, and so are
    pending until saved.

    """

    def __init__(self, **kwargs):
        self._attributes = AttributeStore()
        for key, value in kwargs.items():
            self.set(key, value)

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return self.to_dict() == other.to_dict()

    def __ne__(self, other):
        return not self == other

    __hash__ = object.__hash__

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.to_dict())

    @classmethod
    def field_for(cls, name):
        for field in cls.fields.values():
            if name in (field.attrname, field.api_name):
                return field
        return None

    def get(self, name, default=None):
        """Returns the value of the attribute or record key `name`.

        Declared fields are decoded; other keys are returned as stored.

        """
        field = self.field_for(name)
        if field is not None:
            value = field.__get__(self, type(self))
            return default if value is None else value
        return self._attributes.get(name, default)

    def set(self, name, value):
        field = self.field_for(name)
        if field is not None:
            setattr(self, field.attrname, value)
        else:
            self._attributes.set(name, value)

    def __iter__(self):
        return iter(self._attributes)

    def to_dict(self):
        """Encodes the DataObject as its record, unsaved values included."""
        return self._attributes.to_dict()

    @classmethod
    def from_dict(cls, data):
        """Decodes a record confirmed by the server into a new instance."""
        if not isinstance(data, dict):
            raise TypeError('Cannot decode %s from non-dictionary %r'
                % (cls.__name__, data))
        self = cls()
        self.update_from_dict(data)
        return self

    def update_from_dict(self, data):
        """Replaces the server-confirmed record of this object with `data`.

        Unsaved values are kept.

        """
        if not isinstance(data, dict):
            raise TypeError
        self._attributes.persisted = dict(data)
