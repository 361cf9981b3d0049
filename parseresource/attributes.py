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

The two-layer attribute storage behind every `Resource` instance.

`persisted` holds the values last confirmed by the server. `pending` holds
the values set locally since then, which are what a create or update sends.
Values are kept in their wire (JSON) form; fields decode them on access.

"""

from copy import deepcopy


# Keys only the server may assign.
SERVER_KEYS = frozenset(('objectId', 'createdAt', 'updatedAt'))


class AttributeStore(object):

    def __init__(self, persisted=None, pending=None):
        self.persisted = dict(persisted or {})
        self.pending = {}
        for key, value in (pending or {}).items():
            self.set(key, value)

    def __contains__(self, key):
        return key in self.pending or key in self.persisted

    def __iter__(self):
        keys = list(self.persisted)
        keys.extend(k for k in self.pending if k not in self.persisted)
        return iter(keys)

    def get(self, key, default=None):
        if key in self.pending:
            return self.pending[key]
        return self.persisted.get(key, default)

    def set(self, key, value):
        if key in SERVER_KEYS:
            raise KeyError('%r is assigned by the server and cannot be set'
                % (key,))
        self.pending[key] = value

    def discard(self, key):
        self.pending.pop(key, None)

    @property
    def dirty(self):
        return bool(self.pending)

    def changes(self):
        """Returns a copy of the pending values, suitable for sending."""
        return deepcopy(self.pending)

    def merge(self, remote):
        """Folds a successful server response into the persisted state.

        The response's keys are copied in first, then the pending values
        that were just sent, so the record reads as written without another
        round trip. The pending layer is then empty.

        """
        self.persisted.update(remote or {})
        self.persisted.update(self.pending)
        self.pending = {}

    def reset(self):
        self.persisted = {}
        self.pending = {}

    def to_dict(self):
        data = deepcopy(self.persisted)
        data.update(deepcopy(self.pending))
        return data
