"""Test helper modules for enrichment testing.

This package provides fake collaborators for unit and integration tests:
- fakes.FakeTransport: HttpTransport answering from a URL map
- fakes.RecordingDocumentStore: in-memory store that logs and can fail calls
"""

from .fakes import FakeTransport, RecordingDocumentStore

__all__ = [
    'FakeTransport',
    'RecordingDocumentStore',
]
