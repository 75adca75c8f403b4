"""Validation services: parsing pipeline, business date, upload requests, CLI support."""
