"""Production WSGI serving."""
