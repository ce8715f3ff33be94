from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class ActionResponse(BaseModel):
    success: bool = True
    action: str
