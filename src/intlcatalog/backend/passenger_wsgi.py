"""WSGI entrypoint for serving the intlcatalog backend behind Passenger."""

from intlcatalog.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
