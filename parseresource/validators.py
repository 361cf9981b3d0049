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

Declarative validators checked before a `Resource` is sent to the server.

>>> class User(Resource):
...     validators = (Presence('username', 'password'),)
...

A validator is any callable taking the instance and returning a sequence of
``(field, message)`` pairs describing what is wrong with it. A validator
with an ``on`` attribute of ``"create"`` or ``"update"`` is only checked
before that kind of save.

"""

from parseresource.errors import FieldError


def blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


class Presence(object):

    """Requires the named attributes to be set and not blank."""

    message = "can't be blank"

    def __init__(self, *names, on=None):
        self.names = names
        self.on = on

    def __call__(self, obj):
        return [FieldError(name, self.message) for name in self.names
            if blank(obj.get(name))]


class Length(object):

    """Requires the length of the named attribute to fall within bounds.

    An unset attribute passes; combine with `Presence` to require it.

    """

    def __init__(self, name, minimum=None, maximum=None, on=None):
        self.name = name
        self.on = on
        self.minimum = minimum
        self.maximum = maximum

    def __call__(self, obj):
        value = obj.get(self.name)
        if value is None:
            return []
        if self.minimum is not None and len(value) < self.minimum:
            return [FieldError(self.name,
                'is too short (minimum is %d)' % self.minimum)]
        if self.maximum is not None and len(value) > self.maximum:
            return [FieldError(self.name,
                'is too long (maximum is %d)' % self.maximum)]
        return []
