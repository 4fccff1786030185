from typing import Optional
from datetime import datetime

from jobhub.schemas.common import CamelModel


class FileResponse(CamelModel):
    id: str
    name: str
    size: int
    content_type: Optional[str] = None
    created_at: Optional[datetime] = None
