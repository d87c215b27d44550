"""Crosscutting concerns: config, logging, errors, middleware, metrics."""
