"""Infrastructure layer: HTTP integration, decoding and observability."""
