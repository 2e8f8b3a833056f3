"""
API Dependencies.
Common dependencies shared by the endpoint routers.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.database import get_db


# Type aliases for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
