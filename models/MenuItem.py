from typing import Optional

from pydantic import BaseModel

class MenuItem(BaseModel):
    name: str
    description: str
    price: str
    # V = vegetarian, VE = vegan
    tag: Optional[str] = None
