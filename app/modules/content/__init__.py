"""Localized content: identifier classification, resolution and mutation."""
