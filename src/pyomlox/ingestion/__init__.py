"""Ingestion layer.

Helpers that turn loosely-typed hub payloads into the normalized values the
models and the intrusion monitor rely on.
"""

__all__: list[str] = []
