from pydantic import BaseModel, EmailStr
from typing import Optional, Literal
from travelmarket.models.user.user import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    username: str
    password: str
    role: Literal["general", "provider"] = "general"


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: int
    email: EmailStr
    username: str
    role: UserRole

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole


class ProviderProfileCreate(BaseModel):
    name: str
    provider_type: str
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class ProviderProfileResponse(BaseModel):
    id: int
    name: str
    provider_type: str
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True
