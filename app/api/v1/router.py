from fastapi import APIRouter

from modules.admission_forms.routes import router as admission_forms_router
from modules.events.routes import router as events_router
from modules.forms.routes import router as forms_router
from modules.submissions.routes import router as submissions_router

router = APIRouter()
router.include_router(events_router)
router.include_router(forms_router)
router.include_router(submissions_router)
router.include_router(admission_forms_router)
