import logging

from fastapi import APIRouter, Depends, HTTPException

from portfolio import dependencies as deps
from portfolio.errors import PortfolioError
from portfolio.schemas.contact import ContactFormRequest, ContactFormResponse
from portfolio.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/contact/submit", response_model=ContactFormResponse)
def submit_contact_form(
    request: ContactFormRequest,
    service: ContactService = Depends(deps.get_contact_service),
):
    try:
        submission = service.submit(request)
        return ContactFormResponse(success=True, id=submission.id)
    except PortfolioError as e:
        if e.status_code >= 500:
            logger.error(f"Contact form submission failed: {e}")
        else:
            logger.warning(f"Rejected contact form submission: {e}")
        raise HTTPException(status_code=e.status_code, detail=e.public_message)
    except Exception as e:
        logger.error(f"Unexpected error submitting contact form: {e}")
        raise HTTPException(status_code=500, detail="Contact form submission failed")
