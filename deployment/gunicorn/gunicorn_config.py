import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:" + os.getenv("PORT", "3000"))
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "sync"
max_requests = 500
timeout = 60

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

proc_name = "mobiledoctor-site"

wsgi_app = "core.wsgi:application"


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting Mobile Doctor site")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Mobile Doctor site is live on %s", bind)
