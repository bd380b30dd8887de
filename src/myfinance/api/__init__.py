"""
HTTP layer for myfinance.

Routers here handle only transport concerns (serialisation, bearer-token
authentication, error mapping, request context); behaviour lives in
:mod:`myfinance.ops`.

Quick start::

    from myfinance.api.app import create_app

    app = create_app()  # ready for uvicorn
"""
