"""Gunicorn configuration for the Okecho tank table tool.

Run with: gunicorn --chdir src "app:create_app()"
"""

import multiprocessing
import os

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Lookups are CPU-bound and short; 2 * CPU cores + 1 sync workers
workers = int(os.environ.get("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "sync"
timeout = 30
keepalive = 2
graceful_timeout = 30

proc_name = "okecho-tool"

# Logging
errorlog = "-"  # stderr
accesslog = "-"  # stdout
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Request limits; conversion requests are small JSON bodies
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

# Load the app (and calibration tables) once in the master
preload_app = True
