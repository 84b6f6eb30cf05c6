"""Credential handling, redaction and outbound HTTP."""
