"""WSGI front end for the fetch and search operations, built on werkzeug."""

from __future__ import annotations

import json
import logging

from werkzeug.exceptions import HTTPException
from werkzeug.routing import Map, Rule
from werkzeug.wrappers import Request, Response

from .core.model import BadRequest, NotFound, RangeError, IOFault
from .core.util import search_asdict, fetch_headers, range_error_headers, NO_STORE
from .service import TextService

logger = logging.getLogger(__name__)

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def _json_response(payload, status: int = 200, headers=None) -> Response:
    return Response(json.dumps(payload), status=status, headers=headers,
                    content_type=JSON_CONTENT_TYPE)


def _error(message: str, status: int, headers=None) -> Response:
    return _json_response({"error": message}, status=status, headers=headers)


class TextWindowApp:
    """Serve ``/text/range`` and ``/text/search`` over a `TextService`."""

    def __init__(self, service: TextService):
        self.service = service
        self.url_map = Map([
            Rule("/text/range", endpoint="range", methods=["GET"]),
            Rule("/text/search", endpoint="search", methods=["GET"]),
        ])

    def on_range(self, request: Request) -> Response:
        try:
            result = self.service.fetch(request.args.get("id"), request.headers.get("Range"))
        except RangeError as e:
            logger.warning("Rejected range %r: %s", request.headers.get("Range"), e)
            return Response(status=416, headers=range_error_headers(e))
        return Response(result.payload, status=result.status_code,
                        headers=fetch_headers(result), content_type=TEXT_CONTENT_TYPE)

    def on_search(self, request: Request) -> Response:
        result = self.service.search(
            request.args.get("id"),
            request.args.get("q"),
            max_hits=request.args.get("maxHits"),
            start_offset=request.args.get("startOffset"),
        )
        return _json_response(search_asdict(result), headers={"Cache-Control": NO_STORE})

    def dispatch_request(self, request: Request) -> Response:
        adapter = self.url_map.bind_to_environ(request.environ)
        try:
            endpoint, _ = adapter.match()
            return getattr(self, f"on_{endpoint}")(request)
        except HTTPException as e:
            return e
        except BadRequest as e:
            return _error(str(e), 400)
        except NotFound as e:
            return _error(str(e), 404)
        except IOFault as e:
            logger.warning("I/O fault serving %s: %s", request.path, e)
            return _error(str(e), 500)

    def wsgi_app(self, environ, start_response):
        request = Request(environ)
        response = self.dispatch_request(request)
        return response(environ, start_response)

    def __call__(self, environ, start_response):
        return self.wsgi_app(environ, start_response)


def create_app(service: TextService) -> TextWindowApp:
    """Create the WSGI application for `service`."""
    return TextWindowApp(service)
