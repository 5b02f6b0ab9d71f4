from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, Tuple, Union


class Category(str, Enum):
    SHIRTS = "shirts"
    HOODIES = "hoodies"
    FOOTWEAR = "footwear"
    TOWELS = "towels"
    HOMEWARES = "homewares"
    ACCESSORIES = "accessories"
    CHRISTMAS = "christmas"
    COLOURING = "colouring"
    NOVELTY = "novelty"
    OTHER = "other"


class Product(BaseModel):
    id: Union[int, str]
    name: str
    thumbnail_url: Optional[str] = None
    variant_count: int = Field(default=0, ge=0)
    price: Optional[float] = None
    category: Category = Category.OTHER

    model_config = {"frozen": True}  # immuable = safe


class CatalogueSnapshot(BaseModel):
    """Full product list as fetched from upstream, plus the time it was captured."""
    products: Tuple[Product, ...] = ()
    captured_at: float

    model_config = {"frozen": True}

    @property
    def count(self) -> int:
        return len(self.products)
