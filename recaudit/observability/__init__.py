"""Observability for RecAudit: structured logging and Prometheus counters."""
