"""Integration tests for jira-enrich.

These tests run a document file through EnrichCommand with the real
HttpxTransport, JsonFileDocumentStore and Authenticator. Jira itself is
replaced by an httpx.MockTransport, so no credentials or network access are
needed.
"""
