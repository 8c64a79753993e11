"""Public forms: definitions, submission validation and the submit flow."""

COLLECTION = "forms"
SUBMISSIONS = "form-submissions"
