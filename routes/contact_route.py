import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from helper import check_rate_limit, paginate, sanitize_html
from models import ContactEnquiry, ContactEnquiryDB, ContactEnquiryResponse, ContactStatusUpdate, EnquiryStatus
from routes.user_route import require_admin

logger = logging.getLogger(__name__)

contact_router = APIRouter(
    tags=["Contact"]
)

admin_contact_router = APIRouter(
    prefix="/admin",
    tags=["Admin Enquiries"],
    dependencies=[Depends(require_admin)]
)

def contact_rate_limit(request: Request) -> int:
    return check_rate_limit(request, "contact")

@contact_router.post("/contact", status_code=201, tags=["Contact"])
def submit_enquiry(
    enquiry: ContactEnquiry,
    response: Response,
    remaining: int = Depends(contact_rate_limit),
    db: Session = Depends(get_db)
):
    """
    Stores a contact form submission.

    Free text is HTML-escaped before it reaches the database.

    Returns:
        dict: A success flag, a message for the visitor and the enquiry id.
    """
    try:
        db_enquiry = ContactEnquiryDB(
            name=sanitize_html(enquiry.name),
            email=enquiry.email,
            enquiry_type=enquiry.enquiry_type.value,
            message=sanitize_html(enquiry.message),
            status=EnquiryStatus.NEW.value,
        )
        db.add(db_enquiry)
        db.commit()
        db.refresh(db_enquiry)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to store contact enquiry")
        raise HTTPException(status_code=500, detail="Failed to submit enquiry. Please try again.")

    response.headers["X-RateLimit-Remaining"] = str(remaining)
    return {
        "success": True,
        "message": "Your enquiry has been received. We will be in touch shortly.",
        "id": db_enquiry.id,
    }

@admin_contact_router.get("/enquiries", tags=["Admin Enquiries"])
def get_enquiries(
    status: Optional[EnquiryStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    try:
        query = db.query(ContactEnquiryDB)
        if status:
            query = query.filter(ContactEnquiryDB.status == status.value)
        query = query.order_by(ContactEnquiryDB.created_at.desc(), ContactEnquiryDB.id.desc())
        rows, pagination = paginate(query, page, limit)
        enquiries = [ContactEnquiryResponse.model_validate(row) for row in rows]
        return {"enquiries": jsonable_encoder(enquiries), "pagination": pagination}
    except SQLAlchemyError:
        logger.exception("Failed to fetch enquiries")
        raise HTTPException(status_code=500, detail="Failed to fetch enquiries")

@admin_contact_router.get("/enquiries/{id}", tags=["Admin Enquiries"])
def get_enquiry(id: int, db: Session = Depends(get_db)):
    enquiry = db.query(ContactEnquiryDB).filter(ContactEnquiryDB.id == id).first()
    if not enquiry:
        raise HTTPException(status_code=404, detail="Enquiry not found")
    return {"enquiry": jsonable_encoder(ContactEnquiryResponse.model_validate(enquiry))}

@admin_contact_router.patch("/enquiries/{id}", tags=["Admin Enquiries"])
def update_enquiry_status(id: int, update: ContactStatusUpdate, db: Session = Depends(get_db)):
    enquiry = db.query(ContactEnquiryDB).filter(ContactEnquiryDB.id == id).first()
    if not enquiry:
        raise HTTPException(status_code=404, detail="Enquiry not found")

    try:
        enquiry.status = update.status.value
        db.commit()
        db.refresh(enquiry)
        return {"success": True, "enquiry": {"id": enquiry.id, "status": enquiry.status}}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update enquiry %s", id)
        raise HTTPException(status_code=500, detail="Failed to update enquiry")
