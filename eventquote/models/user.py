from sqlalchemy import Column, String, Enum
from eventquote.models.base import BaseModel
from eventquote.core.enums import UserRole


class User(BaseModel):
    __tablename__ = "users"
    email = Column(String(120), unique=True, nullable=False, index=True)
    name = Column(String(120), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.QUOTER)
