"""Tool protocols and schemas."""
