# schoolhub/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
school_id_ctx = contextvars.ContextVar("school_id", default=None)
