from __future__ import annotations
import ipaddress
from typing import Optional

from flask import Flask, Response, current_app, request

from ..state import Store
from .ui import render_hello, render_html, render_text

NOT_FOUND = "Not found\n"
INTERNAL_ERROR = "Internal Server Error\n"
TEXT_MIMETYPE = "text/plain"
HTML_MIMETYPE = "text/html"

def client_address(remote_addr: Optional[str]):
    """Key for the dedup map: a parsed ip address, IPv4-mapped v6 folded to v4."""
    if not remote_addr:
        return "unknown"
    try:
        addr = ipaddress.ip_address(remote_addr)
    except ValueError:
        return remote_addr
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped:
        return addr.ipv4_mapped
    return addr

def wants_html() -> bool:
    # explicit text/html only; */* from curl and friends gets plain text
    return any(value == HTML_MIMETYPE and quality > 0
               for value, quality in request.accept_mimetypes)

def create_app(store: Store) -> Flask:
    app = Flask(__name__)

    @app.route("/", methods=["GET", "HEAD"], provide_automatic_options=False)
    @app.route("/hi", methods=["GET", "HEAD"], provide_automatic_options=False)
    def index():
        view = store.view()
        html = wants_html()
        try:
            body = render_html(view) if html else render_text(view)
        except Exception:
            current_app.logger.exception("rendering hi page failed")
            return Response(INTERNAL_ERROR, status=500, mimetype=TEXT_MIMETYPE)
        return Response(body, mimetype=HTML_MIMETYPE if html else TEXT_MIMETYPE)

    @app.post("/hi", provide_automatic_options=False)
    def say_hi():
        request.get_data()  # drain the body before touching the store
        counted, hi_count = store.say_hello(client_address(request.remote_addr))
        return Response(render_hello(counted, hi_count), mimetype=TEXT_MIMETYPE)

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(_err):
        return Response(NOT_FOUND, status=404, mimetype=TEXT_MIMETYPE)

    return app
