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

from urllib.parse import parse_qsl, urlsplit

import httplib2
import mock
import simplejson as json

from parseresource import http


BASE_URL = 'https://api.example.com/1/'

HEADERS = {
    'accept': 'application/json',
    'x-parse-application-id': 'app',
    'x-parse-rest-api-key': 'key',
}

BODY_HEADERS = dict(HEADERS, **{'content-type': 'application/json'})


def make_response(response):
    """Returns the `httplib2.Response` and content for a canned response.

    `response` is either the content of a 200 OK response, or a dict of
    headers with a ``status`` or ``content`` key (or both).

    """
    if isinstance(response, dict) and ('status' in response or 'content' in response):
        response = dict(response)
        content = response.pop('content', '')
        response_info = {'status': 200, 'content-type': 'application/json'}
        response_info.update(response)
    else:
        response_info = {'status': 200, 'content-type': 'application/json'}
        content = response

    if not isinstance(content, (bytes, str)):
        content = json.dumps(content)
    if isinstance(content, str):
        content = content.encode('utf-8')
    return httplib2.Response(response_info), content


def mock_http(*responses):
    """Returns a mock user agent giving the canned `responses` in order."""
    mock_agent = mock.Mock(spec=httplib2.Http)
    mock_agent.request.side_effect = [make_response(r) for r in responses]
    return mock_agent


def failing_http(exc):
    mock_agent = mock.Mock(spec=httplib2.Http)
    mock_agent.request.side_effect = exc
    return mock_agent


def request_of(mock_agent, index=-1):
    """Returns the keyword arguments of a request the mock agent received."""
    return mock_agent.request.call_args_list[index][1]


def params_of(mock_agent, index=-1):
    """Returns the query string parameters of a request the mock agent
    received, with ``where`` decoded."""
    query = urlsplit(request_of(mock_agent, index)['uri']).query
    params = dict(parse_qsl(query))
    if 'where' in params:
        params['where'] = json.loads(params['where'])
    return params


def body_of(mock_agent, index=-1):
    return json.loads(request_of(mock_agent, index)['body'])


class IsolatedSettings(object):
    """Mixin replacing the process-wide settings for each test."""

    def setUp(self):
        super(IsolatedSettings, self).setUp()
        patcher = mock.patch.object(http, 'settings',
            http.Settings(environ={'PARSE_BASE_URL': BASE_URL}))
        patcher.start()
        self.addCleanup(patcher.stop)

