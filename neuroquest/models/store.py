"""Store item models"""
from pydantic import BaseModel, Field


class StoreItem(BaseModel):
    """Item purchasable with currency"""
    id: str
    name: str
    description: str = ""
    price: int = Field(ge=0)
