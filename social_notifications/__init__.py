"""Notification fan-out and delivery pipeline for the social backend."""
