"""Gunicorn configuration for production deployment."""

import os

# Server socket
bind = os.environ.get('SEATDESK_BIND', '0.0.0.0:8000')

# Worker processes: 2 workers with 4 threads each.
# Writers serialize on the SQLite write lock; keep the pool small.
workers = 2
threads = 4
worker_class = 'gthread'

# Timeout for slow requests
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logging
_log_dir = os.environ.get('SEATDESK_LOG_DIR', 'logs')
accesslog = os.path.join(_log_dir, 'gunicorn-access.log')
errorlog = os.path.join(_log_dir, 'gunicorn-error.log')
loglevel = 'info'
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = 'seatdesk'

# Preload app for faster worker startups
preload_app = True

# Worker recycling: restart workers after 1000 requests to prevent memory leaks
max_requests = 1000
max_requests_jitter = 50

# Security
limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
