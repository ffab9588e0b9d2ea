"""Portfolio — FastAPI REST API layer.

This package exposes the gallery layout core over HTTP for the site's
rendering layer.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
"""
