"""HTTP middleware. Applied in main app; last added = outermost."""

from object_selector.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
