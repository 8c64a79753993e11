"""Seed data: the admission form and first-run demo content."""
