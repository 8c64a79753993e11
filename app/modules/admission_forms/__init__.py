"""Admission forms collection: public listing and localized CRUD."""

COLLECTION = "admission-forms"
