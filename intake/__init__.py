"""Incident intake backend: remediation action items and their lifecycle guards."""
