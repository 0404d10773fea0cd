"""
ASGI entrypoint. Serve with an ASGI server (uvicorn, daphne) so the
notification stream can hold connections open.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
