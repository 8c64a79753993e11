"""Idempotent loading of the admission form and demo content.

The admission form is created once, identified by its slug. Demo events and
the sample admission record are only imported on the first run, tracked by
a marker record in the `setup` collection.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from infrastructure.configuration import Settings
from infrastructure.logging import get_module_logger
from infrastructure.persistence import DocumentStore, StoreError
from modules.admission_forms import COLLECTION as ADMISSION_FORMS
from modules.events import COLLECTION as EVENTS
from modules.forms import COLLECTION as FORMS

logger = get_module_logger()

DATA_DIR = Path(__file__).parent / "data"
SETUP_COLLECTION = "setup"
FIRST_RUN_KEY = "initHasRun"
ADMISSION_FORM_SLUG = "admission-form"


@dataclass
class SeedSummary:
    first_run: bool
    admission_form_created: bool
    events_created: int = 0
    admission_records_created: int = 0


def load_seed_file(name: str) -> Dict[str, Any]:
    with open(DATA_DIR / name, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


async def is_first_run(store: DocumentStore) -> bool:
    """Report whether seeding ran before, and mark it as run."""
    if await store.count(SETUP_COLLECTION, {"key": FIRST_RUN_KEY}):
        return False
    await store.create(SETUP_COLLECTION, {"key": FIRST_RUN_KEY, "value": True})
    return True


async def seed_admission_form(
    store: DocumentStore, locale: str, notification_emails: Sequence[str]
) -> bool:
    """Create the admission form unless a form with its slug exists.

    Returns:
        True if the form was created.

    Raises:
        StoreError: If the store rejects the form.
    """
    existing = await store.find_many(
        FORMS, filters={"slug": ADMISSION_FORM_SLUG}, locale=None, limit=1
    )
    if existing:
        logger.info("admission_form_exists", document_id=existing[0].document_id)
        return False

    data = load_seed_file("admission_form.yml")
    data["notificationEmails"] = list(notification_emails)
    data["publishedAt"] = datetime.now(timezone.utc)
    record = await store.create(FORMS, data, locale)
    logger.info("admission_form_created", id=record.id, document_id=record.document_id)
    return True


async def _create_entries(
    store: DocumentStore, collection: str, entries: List[Dict[str, Any]], locale: str
) -> int:
    created = 0
    for entry in entries:
        try:
            await store.create(collection, entry, locale)
        except StoreError as e:
            logger.warning(
                "seed_entry_failed",
                collection=collection,
                slug=entry.get("slug"),
                error=e.message,
            )
            continue
        created += 1
    return created


async def seed_content(store: DocumentStore, settings: Settings) -> SeedSummary:
    """Seed the admission form, then the demo content on the first run."""
    locale = settings.content.default_locale
    form_created = await seed_admission_form(
        store, locale, settings.forms.ADMISSION_FORM_EMAILS
    )
    summary = SeedSummary(
        first_run=await is_first_run(store), admission_form_created=form_created
    )

    if not summary.first_run:
        logger.info("demo_content_already_imported")
        return summary

    demo = load_seed_file("demo_content.yml")
    published_at = datetime.now(timezone.utc)
    events = [{**event, "publishedAt": published_at} for event in demo.get("events", [])]
    summary.events_created = await _create_entries(store, EVENTS, events, locale)
    summary.admission_records_created = await _create_entries(
        store, ADMISSION_FORMS, demo.get("admission_forms", []), locale
    )

    logger.info(
        "demo_content_imported",
        events=summary.events_created,
        admission_forms=summary.admission_records_created,
    )
    return summary
