# Routes package __init__.py - re-exports routers for main.py convenience
from .verses import router as verses_router
from .review import router as review_router
from .stats import router as stats_router

__all__ = ['verses_router', 'review_router', 'stats_router']
