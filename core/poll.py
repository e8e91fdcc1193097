from typing import Optional

import requests


NOT_MODIFIED = 304


class PollRequest(object):
    """ A request that can be executed repeatedly.

    After each poll the entity tag of the response, if any, is sent back with the next poll as `If-None-Match`.
    When the resource did not change the service answers `304 Not Modified`, which the caller recognizes by status
    (see `not_modified()`).

    Notes:
        There is no pacing, retry or backoff. Transport errors propagate unchanged.

    Example:
        >>> req = client.new_request('GET', '/v1/candles?instrument=EUR_USD&granularity=H4')
        >>> poller = client.new_poll_request(req)
        >>> rsp = poller.poll()
        >>> if not poller.not_modified(rsp):
        >>>     candles = client.decode_response(rsp)
    """
    def __init__(self, client, request: requests.PreparedRequest):
        self.client = client
        self.request = request
        self._etag: Optional[str] = None

    @property
    def etag(self) -> Optional[str]:
        """ Entity tag of the most recent response that carried one. """
        return self._etag

    def poll(self) -> requests.Response:
        """ Repeat the request with which `PollRequest` was created.

        Returns:
            Raw response with its body loaded. Decoding is left to the caller.
        """
        self.client.tracer.debug("poll %s %s", self.request.method, self.request.url)
        rsp = self.client.send(self.request)

        etag = rsp.headers.get('ETag')
        if etag:
            self._etag = etag
            self.request.headers['If-None-Match'] = etag
        return rsp

    @staticmethod
    def not_modified(response: requests.Response) -> bool:
        return response.status_code == NOT_MODIFIED
