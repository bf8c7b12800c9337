"""Application layer wiring features into runnable services."""
