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

Parse's built-in user class.

Signing up is saving a new `User`. Logging in, logging in through Facebook
and requesting a password reset go to their own endpoints; like the other
operations they don't raise when the request fails, but return `None` (or
`False` for `reset_password()`).

"""

from datetime import datetime, timedelta, timezone
import logging

from parseresource import fields
from parseresource.errors import ParseResourceError
from parseresource.http import Connection
from parseresource.resource import Resource
from parseresource.validators import Presence


log = logging.getLogger('parseresource.user')


def now():
    return datetime.now(timezone.utc)


class User(Resource):

    class_name = '_User'

    username = fields.Field()
    password = fields.Field()
    email = fields.Field()
    sessionToken = fields.ReadOnly()

    # The server never sends the password back, so only a signup needs one.
    validators = (
        Presence('username'),
        Presence('password', on='create'),
    )

    @property
    def session_token(self):
        return self.sessionToken

    @classmethod
    def collection_path(cls):
        return 'users'

    def request_headers(self):
        """Sends the user's session token, so Parse lets it change itself."""
        if self.sessionToken is None:
            return {}
        return {'x-parse-session-token': self.sessionToken}

    @classmethod
    def _fetch_user(cls, action, method, path, http=None, **kwargs):
        try:
            data = Connection(cls, http=http).fetch(method, path, **kwargs)
        except ParseResourceError as exc:
            log.warning('%s failed: %s', action, exc)
            return None
        return cls.from_dict(data)

    @classmethod
    def authenticate(cls, username, password, http=None):
        """Logs in with a username and password, returning the user with its
        session token, or `None` if the login failed."""
        return cls._fetch_user('Login', 'GET', 'login', http=http,
            params={'username': username, 'password': password})

    @classmethod
    def authenticate_with_facebook(cls, user_id, access_token, expires,
                                   http=None):
        """Logs in (or signs up) the user linked to a Facebook account.

        Parameter `expires` is the number of seconds the Facebook access
        token remains valid for. Returns the user, or `None` if the login
        failed.

        """
        try:
            expiration = now() + timedelta(seconds=int(expires))
        except (TypeError, ValueError, OverflowError) as exc:
            log.warning('Facebook login with bad expiry %r: %s', expires, exc)
            return None
        body = {
            'authData': {
                'facebook': {
                    'id': user_id,
                    'access_token': access_token,
                    'expiration_date': fields.isoformat(expiration),
                },
            },
        }
        return cls._fetch_user('Facebook login', 'POST', cls.collection_path(),
            http=http, body=body)

    @classmethod
    def reset_password(cls, email, http=None):
        """Asks Parse to email a password reset link to `email`.

        Returns whether the request was accepted.

        """
        try:
            Connection(cls, http=http).fetch('POST', 'requestPasswordReset',
                body={'email': email})
        except ParseResourceError as exc:
            log.warning('Password reset for %s failed: %s', email, exc)
            return False
        return True
