from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass
class CategoryDTO:
    id: Optional[int]
    name: str


@dataclass
class ProductDTO:
    id: Optional[int]
    name: str
    description: str
    price: Decimal
    img_url: str = ""
    date: Optional[datetime] = None
    categories: List[CategoryDTO] = field(default_factory=list)


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
