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

from datetime import datetime, timezone
import socket
import unittest

import mock

from parseresource import user
from parseresource.errors import RemoteRejection
from tests import utils
from tests.models import Member


USERS_URL = utils.BASE_URL + 'users'


class TestUsers(utils.IsolatedSettings, unittest.TestCase):

    def test_class(self):
        self.assertEqual(Member.class_name, '_User')
        self.assertEqual(Member.collection_path(), 'users')
        m = Member.from_dict({'objectId': 'u1'})
        self.assertEqual(m.instance_path(), 'users/u1')

    def test_signup(self):
        h = utils.mock_http({'status': 201, 'content': {
            'objectId': 'u1',
            'createdAt': '2011-11-07T20:58:34.448Z',
            'sessionToken': 'r:abc',
        }})
        m = Member(username='molly', password='secret', email='molly@example.com')
        self.assertTrue(m.save(http=h))
        self.assertEqual(utils.request_of(h)['uri'], USERS_URL)
        self.assertEqual(utils.body_of(h), {
            'username': 'molly',
            'password': 'secret',
            'email': 'molly@example.com',
        })
        self.assertEqual(m.id, 'u1')
        self.assertEqual(m.session_token, 'r:abc')

    def test_signup_validation(self):
        h = mock.Mock()
        m = Member(username='molly')
        self.assertFalse(m.save(http=h))
        self.assertEqual(m.errors, [('password', "can't be blank")])
        self.assertEqual(h.mock_calls, [])

        m = Member()
        self.assertFalse(m.is_valid())
        self.assertEqual([e.field for e in m.errors], ['username', 'password'])

    def test_username_taken(self):
        h = utils.mock_http({'status': 400,
            'content': {'code': 202, 'error': 'username molly already taken'}})
        m = Member(username='molly', password='secret')
        self.assertFalse(m.save(http=h))
        self.assertTrue(m.new)
        self.assertEqual(m.errors, [('username', 'has already been taken')])
        self.assertTrue(isinstance(m.failure, RemoteRejection))

    def test_update_with_session(self):
        h = utils.mock_http({'updatedAt': '2011-11-07T21:25:10.623Z'})
        m = Member.from_dict({'objectId': 'u1', 'username': 'molly',
            'sessionToken': 'r:abc'})
        m.email = 'new@example.com'
        self.assertTrue(m.save(http=h))
        request = utils.request_of(h)
        self.assertEqual(request['uri'], USERS_URL + '/u1')
        self.assertEqual(request['method'], 'PUT')
        self.assertEqual(request['headers'],
            dict(utils.BODY_HEADERS, **{'x-parse-session-token': 'r:abc'}))

    def test_authenticate(self):
        h = utils.mock_http({'objectId': 'u1', 'username': 'molly',
            'sessionToken': 'r:abc'})
        m = Member.authenticate('molly', 'secret', http=h)
        self.assertTrue(isinstance(m, Member))
        self.assertTrue(m.persisted)
        self.assertEqual(m.username, 'molly')
        self.assertEqual(m.session_token, 'r:abc')
        h.request.assert_called_once_with(
            uri=utils.BASE_URL + 'login?password=secret&username=molly',
            method='GET', headers=utils.HEADERS)

    def test_authenticate_failed(self):
        h = utils.mock_http({'status': 404,
            'content': {'code': 101, 'error': 'invalid login parameters'}})
        self.assertTrue(Member.authenticate('molly', 'wrong', http=h) is None)

        h = utils.failing_http(socket.error('refused'))
        self.assertTrue(Member.authenticate('molly', 'secret', http=h) is None)

        h = utils.mock_http({'status': 200, 'content': 'not json'})
        self.assertTrue(Member.authenticate('molly', 'secret', http=h) is None)

    def test_facebook(self):
        h = utils.mock_http({'status': 201, 'content': {
            'objectId': 'u2',
            'createdAt': '2012-02-28T23:49:36.353Z',
            'sessionToken': 'r:fb',
        }})
        fixed = datetime(2012, 2, 28, 23, 49, 36, 353000, tzinfo=timezone.utc)
        with mock.patch.object(user, 'now', return_value=fixed):
            m = Member.authenticate_with_facebook('fb1', 'token', '3600', http=h)

        self.assertEqual(m.id, 'u2')
        self.assertEqual(m.session_token, 'r:fb')
        request = utils.request_of(h)
        self.assertEqual(request['uri'], USERS_URL)
        self.assertEqual(request['method'], 'POST')
        self.assertEqual(utils.body_of(h), {'authData': {'facebook': {
            'id': 'fb1',
            'access_token': 'token',
            'expiration_date': '2012-02-29T00:49:36.353Z',
        }}})

    def test_facebook_failed(self):
        h = utils.mock_http({'status': 400,
            'content': {'code': 251, 'error': 'invalid linked session'}})
        self.assertTrue(
            Member.authenticate_with_facebook('fb1', 'token', 60, http=h) is None)

    def test_facebook_bad_expiry(self):
        h = mock.Mock()
        for expires in ('soon', None, 10 ** 20):
            self.assertTrue(Member.authenticate_with_facebook('fb1', 'token',
                expires, http=h) is None)
        self.assertEqual(h.mock_calls, [])

    def test_reset_password(self):
        h = utils.mock_http({'content': {}})
        self.assertTrue(Member.reset_password('molly@example.com', http=h))
        h.request.assert_called_once_with(
            uri=utils.BASE_URL + 'requestPasswordReset', method='POST',
            headers=utils.BODY_HEADERS, body=b'{"email": "molly@example.com"}')

        h = utils.mock_http({'status': 400,
            'content': {'code': 205, 'error': 'no user found with email'}})
        self.assertFalse(Member.reset_password('nobody@example.com', http=h))
        h = utils.failing_http(socket.error('refused'))
        self.assertFalse(Member.reset_password('molly@example.com', http=h))
