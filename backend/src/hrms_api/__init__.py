"""HRMS API - employee records, organization structure, bank details and employment history."""

__version__ = "0.1.0"
