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

Lifecycle hooks for `Resource` classes.

Decorate a method with `hook()` to have it run around a save, create, update
or destroy:

>>> class Post(Resource):
...     title = fields.Field()
...
...     @hook('before_save')
...     def strip_title(self):
...         self.title = self.title.strip()
...

Each class's hooks are gathered into ordered lists when the class is
declared, parent classes' hooks first, in declaration order.

"""

EVENTS = (
    'before_save', 'after_save',
    'before_create', 'after_create',
    'before_update', 'after_update',
    'before_destroy', 'after_destroy',
)


def hook(*events):
    """Marks the decorated method to run on the named lifecycle events."""
    for event in events:
        if event not in EVENTS:
            raise ValueError('No such lifecycle event %r' % (event,))

    def mark(fn):
        fn._hook_events = getattr(fn, '_hook_events', ()) + events
        return fn
    return mark


def collect_hooks(bases, attrs):
    """Returns the mapping of event names to tuples of hook method names for
    a class with the given `bases` and attributes."""
    hooks = dict((event, []) for event in EVENTS)
    for base in bases:
        for event, names in getattr(base, 'hooks', {}).items():
            hooks[event].extend(n for n in names if n not in hooks[event])

    for attrname, value in attrs.items():
        for event in getattr(value, '_hook_events', ()):
            if attrname not in hooks[event]:
                hooks[event].append(attrname)

    return dict((event, tuple(names)) for event, names in hooks.items())


def run_hooks(obj, event):
    for name in type(obj).hooks[event]:
        getattr(obj, name)()
