"""Shared utilities: logging, Kafka producer and event schemas."""
