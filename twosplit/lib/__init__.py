"""Shared configuration, logging and tracing helpers."""
