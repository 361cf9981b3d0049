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

import unittest

from parseresource.attributes import AttributeStore


class TestAttributeStore(unittest.TestCase):

    def test_get_prefers_pending(self):
        a = AttributeStore(persisted={'title': 'old', 'author': 'B'})
        self.assertEqual(a.get('title'), 'old')
        a.set('title', 'new')
        self.assertEqual(a.get('title'), 'new')
        self.assertEqual(a.persisted['title'], 'old')
        self.assertEqual(a.get('author'), 'B')
        self.assertEqual(a.get('missing'), None)
        self.assertEqual(a.get('missing', 7), 7)

    def test_contains(self):
        a = AttributeStore(persisted={'title': 'A'}, pending={'author': 'B'})
        self.assertTrue('title' in a)
        self.assertTrue('author' in a)
        self.assertFalse('body' in a)
        self.assertEqual(sorted(a), ['author', 'title'])

    def test_server_keys(self):
        a = AttributeStore()
        for key in ('objectId', 'createdAt', 'updatedAt'):
            self.assertRaises(KeyError, a.set, key, 'x')
        self.assertEqual(a.pending, {})

    def test_merge(self):
        a = AttributeStore(pending={'title': 'A', 'author': 'B'})
        self.assertTrue(a.dirty)
        a.merge({'objectId': 'xyz', 'createdAt': 't1'})
        self.assertFalse(a.dirty)
        self.assertEqual(a.pending, {})
        self.assertEqual(a.persisted, {
            'objectId': 'xyz',
            'createdAt': 't1',
            'title': 'A',
            'author': 'B',
        })

    def test_merge_keeps_sent_values(self):
        a = AttributeStore(persisted={'title': 'old', 'updatedAt': 't1'})
        a.set('title', 'new')
        a.merge({'updatedAt': 't2', 'title': 'stale'})
        self.assertEqual(a.get('title'), 'new')
        self.assertEqual(a.get('updatedAt'), 't2')

    def test_changes_are_copies(self):
        a = AttributeStore(pending={'tags': ['a']})
        changes = a.changes()
        changes['tags'].append('b')
        self.assertEqual(a.get('tags'), ['a'])

    def test_discard(self):
        a = AttributeStore(persisted={'title': 'A'})
        a.set('title', 'B')
        a.discard('title')
        a.discard('nothing')
        self.assertEqual(a.get('title'), 'A')

    def test_reset(self):
        a = AttributeStore(persisted={'objectId': 'xyz'}, pending={'a': 1})
        a.reset()
        self.assertEqual(a.persisted, {})
        self.assertEqual(a.pending, {})
        self.assertEqual(a.to_dict(), {})
