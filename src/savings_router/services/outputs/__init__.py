"""Output serializers."""

from .routing_formatter import issue_to_json, routing_run_to_csv, routing_run_to_json

__all__ = ["issue_to_json", "routing_run_to_json", "routing_run_to_csv"]
