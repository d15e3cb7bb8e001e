from pydantic import BaseModel


class LineLinkRequest(BaseModel):
    driver_id: str | None = None
    line_user_id: str | None = None


class LineLinkResponse(BaseModel):
    success: bool
    message: str
