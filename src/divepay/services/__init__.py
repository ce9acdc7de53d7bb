"""Consumers of computed pay slips: batch runs, dashboard, reports, notifications."""
