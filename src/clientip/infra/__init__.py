"""Infrastructure: logging, tracing and the ASGI integration."""
