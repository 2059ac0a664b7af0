"""
Exception handlers for the clawdesk server.

This package contains the exception handlers for domain errors and
unexpected failures, and a setup function to register them with the
FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
