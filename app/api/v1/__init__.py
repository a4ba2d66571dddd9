from app.api.v1 import timeline

__all__ = [
    "timeline",
]
