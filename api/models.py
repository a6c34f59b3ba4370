from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class CodeReviewRequest(BaseModel):
    code: str
    system_instruction: str = Field(alias="systemInstruction")

    model_config = ConfigDict(populate_by_name=True)


class CodeReviewResponse(BaseModel):
    text: Optional[str] = None


class CodeReviewError(BaseModel):
    error: str
