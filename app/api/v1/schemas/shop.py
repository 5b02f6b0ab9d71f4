# api/v1/schemas/shop.py
from pydantic import BaseModel, Field
from typing import List, Optional, Union

class ProductOut(BaseModel):
    id: Union[int, str]
    name: str
    thumbnail_url: Optional[str] = None
    variant_count: int = 0
    price: Optional[float] = None
    category: str

class ShopPageOut(BaseModel):
    current_category: str
    tabs: List[str]
    products: List[ProductOut] = Field(default_factory=list)
    all_products: List[ProductOut] = Field(default_factory=list)
    total_count: int = 0
