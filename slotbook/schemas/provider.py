from pydantic import BaseModel, EmailStr

class ProviderCreate(BaseModel):
    email: EmailStr
    name: str

class ProviderResponse(BaseModel):
    id: int
    email: EmailStr
    name: str
    is_active: bool

    class Config:
        from_attributes = True
