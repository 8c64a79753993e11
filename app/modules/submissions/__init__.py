"""Form submission side effects: PDF archive, notification email, PDF download."""

from modules.forms import SUBMISSIONS as COLLECTION

ADMIN_PATH = "/content-manager/collection-types/api::form-submission.form-submission"
