from typing import Optional

from pydantic import BaseModel


class ContactFormRequest(BaseModel):
    name: str = ""
    email: str = ""
    message: str = ""
    subject: Optional[str] = None


class ContactFormSubmission(BaseModel):
    id: str
    name: str
    email: str
    message: str
    subject: Optional[str] = None
    createdAt: Optional[str] = None
    status: str = "NEW"


class ContactFormResponse(BaseModel):
    success: bool
    id: Optional[str] = None
