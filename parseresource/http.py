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

Transport to the Parse REST API through `httplib2`, with JSON coding through
`simplejson`.

Every request carries the application's credentials, which are found first
on the `Resource` class making the request (its ``application_id``,
``api_key``, ``master_key`` and ``base_url`` attributes), then in the
process-wide `settings`, which are read from the ``PARSE_APPLICATION_ID``,
``PARSE_REST_API_KEY``, ``PARSE_MASTER_KEY`` and ``PARSE_BASE_URL``
environment variables and can be changed with `configure()`.

"""

import http.client
import logging
import os
from urllib.parse import urlencode, urljoin

import httplib2
import simplejson as json

from parseresource.errors import RemoteRejection, TransportFailure


userAgent = httplib2.Http()

log = logging.getLogger('parseresource.http')

DEFAULT_BASE_URL = 'https://api.parse.com/1/'

content_type = 'application/json'


class Settings(object):

    """Process-wide Parse credentials."""

    keys = ('application_id', 'api_key', 'master_key', 'base_url')

    def __init__(self, environ=None):
        if environ is None:
            environ = os.environ
        self.application_id = environ.get('PARSE_APPLICATION_ID')
        self.api_key = environ.get('PARSE_REST_API_KEY')
        self.master_key = environ.get('PARSE_MASTER_KEY')
        self.base_url = environ.get('PARSE_BASE_URL', DEFAULT_BASE_URL)

    def update(self, **kwargs):
        for key, value in kwargs.items():
            if key not in self.keys:
                raise TypeError('Unknown setting %r' % (key,))
            setattr(self, key, value)


settings = Settings()


def configure(**kwargs):
    """Sets the process-wide Parse credentials.

    Accepts `application_id`, `api_key`, `master_key` and `base_url`.

    """
    settings.update(**kwargs)


def encode(value):
    return json.dumps(value).encode('utf-8')


def decode(content):
    """Decodes a JSON response body.

    Bytes that aren't UTF-8 are replaced with the Unicode replacement
    character rather than failing the whole response.

    """
    if isinstance(content, bytes):
        content = content.decode('utf-8', 'replace')
    return json.loads(content)


class Connection(object):

    """The credentials and user agent for talking to one Parse application.

    Parameter `source` is the object (usually a `Resource` class) whose
    attributes override the process-wide settings. Optional parameter `http`
    is the user agent to use, which should be compatible with
    `httplib2.Http` instances.

    """

    def __init__(self, source=None, http=None):
        self.source = source
        self.http = userAgent if http is None else http

    def setting(self, key):
        value = getattr(self.source, key, None)
        if value is None:
            value = getattr(settings, key)
        return value

    def url(self, path, params=None):
        url = urljoin(self.setting('base_url'), path)
        if params:
            url = '%s?%s' % (url, urlencode(sorted(params.items())))
        return url

    def headers(self, extra=None):
        headers = {'accept': content_type}
        application_id = self.setting('application_id')
        if application_id is not None:
            headers['x-parse-application-id'] = application_id
        master_key = self.setting('master_key')
        if master_key is not None:
            headers['x-parse-master-key'] = master_key
        else:
            api_key = self.setting('api_key')
            if api_key is not None:
                headers['x-parse-rest-api-key'] = api_key
        if extra:
            headers.update(extra)
        return headers

    def request(self, method, path, body=None, params=None, headers=None):
        """Makes a request to the API, returning the `httplib2.Response` and
        content as `httplib2.Http.request()` does.

        Parameter `body`, if given, is encoded as JSON. Parameter `params` is
        a dictionary of query string parameters.

        Network failures are raised as `TransportFailure`.

        """
        headers = self.headers(headers)
        request = dict(uri=self.url(path, params), method=method,
            headers=headers)
        if body is not None:
            headers['content-type'] = content_type
            request['body'] = encode(body)

        log.debug('%s %s', method, request['uri'])
        try:
            return self.http.request(**request)
        except (httplib2.HttpLib2Error, http.client.HTTPException, OSError) as exc:
            raise TransportFailure('%s %s failed: %s'
                % (method, request['uri'], exc)) from exc

    def fetch(self, method, path, body=None, params=None, headers=None):
        """Makes a request and returns its decoded, successful result.

        Failures are raised as `RemoteRejection` or `TransportFailure`, as
        determined by `check_response()`.

        """
        response, content = self.request(method, path, body=body,
            params=params, headers=headers)
        return check_response(self.url(path, params), response, content)


def check_response(url, response, content):
    """Returns the decoded content of a successful response, raising the
    appropriate exception for any other.

    A 4xx response with a Parse error body raises `RemoteRejection`. Any
    other unsuccessful status, and any response that isn't JSON, raises
    `TransportFailure`.

    """
    status = response.status

    if 200 <= status < 300:
        if not content:
            return {}
        try:
            data = decode(content)
        except ValueError as exc:
            raise TransportFailure('Bad response requesting %s: %s'
                % (url, exc)) from exc
        if not isinstance(data, dict):
            raise TransportFailure('Bad response requesting %s: expected'
                ' an object, not %r' % (url, data))
        return data

    if 400 <= status < 500:
        try:
            data = decode(content)
        except ValueError:
            data = None
        if isinstance(data, dict) and 'code' in data:
            raise RemoteRejection(data['code'], data.get('error'), status)

    raise TransportFailure('Unexpected response requesting %s: %d %s'
        % (url, status, getattr(response, 'reason', '')))
