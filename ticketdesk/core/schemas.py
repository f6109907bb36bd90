# ticketdesk/core/schemas.py
from typing import Annotated

from pydantic import BaseModel, StringConstraints

# input text is stored trimmed; a blank value counts as missing
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class MessageOut(BaseModel):
    success: bool = True
    message: str
